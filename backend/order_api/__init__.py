"""OrderItem API — document-style CRUD service for order line items."""
