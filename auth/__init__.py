"""
auth — Bearer-token authentication.

Provides:
  • JWT creation & verification (PyJWT)
  • Password hashing (bcrypt)
  • Login API route
  • ``get_current_identity`` FastAPI dependency (the request guard)
"""
