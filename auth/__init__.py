"""
auth — User authentication module.

Provides:
  • Password hashing (bcrypt, configurable cost)
  • Account registration / login checks
  • JWT issuance & validation
  • Register / Login API routes
  • ``get_current_account_id`` FastAPI dependency
"""
