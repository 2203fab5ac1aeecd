"""
auth — Token and password handling.

Provides:
  • JWT verification (and issuing, for tooling and tests)
  • Password hashing (bcrypt)
  • ``get_current_user_id`` / ``get_authorized_user_id`` FastAPI dependencies
"""
