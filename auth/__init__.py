"""
auth — User authentication module.

Provides:
  • JWT session token creation & verification
  • Password hashing (bcrypt)
  • Register / Login / Protected routes
  • ``require_identity`` FastAPI dependency (the auth gate)
"""
