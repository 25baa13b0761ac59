"""
auth — User authentication module.

Provides:
  • Signed, time-limited token creation & verification
  • Password hashing (bcrypt)
  • Bearer-token extraction and the ``get_current_user_id`` dependency
  • Register / Login API routes
"""
