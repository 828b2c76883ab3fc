"""
auth — User authentication module.

Provides:
  • Token creation & verification (HMAC-SHA256 signed)
  • Password hashing (bcrypt)
  • Register / Login / Me API routes
  • ``get_current_identity`` FastAPI dependency
"""
