"""
auth — User authentication module.

Provides:
  • Argon2 password hashing & verification
  • JWT access-token issuance & validation (``TokenIssuer``)
  • Signup / signin service and API routes
  • ``require_identity`` authorization gate and ``current_identity`` dependency
"""
