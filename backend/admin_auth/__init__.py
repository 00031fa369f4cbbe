# admin_auth/__init__.py
"""
Session authentication service.

Register / login with bcrypt-hashed passwords, a signed JWT carried in an
HttpOnly `jwt` cookie, and current-user resolution from that cookie.
"""
