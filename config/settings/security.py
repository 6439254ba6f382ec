"""
Security & cookie settings.
These should be hardened in production.
"""
import environ

env = environ.Env()

# Cookies
SESSION_COOKIE_SECURE = env.bool("SESSION_COOKIE_SECURE", default=False)   # True in production
CSRF_COOKIE_SECURE = env.bool("CSRF_COOKIE_SECURE", default=False)         # True in production
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=[])

# HSTS (force HTTPS in browsers)
SECURE_HSTS_SECONDS = env.int("SECURE_HSTS_SECONDS", default=0)  # > 31536000 in production (1 year)
SECURE_HSTS_INCLUDE_SUBDOMAINS = SECURE_HSTS_SECONDS > 0
SECURE_HSTS_PRELOAD = False

# Trust HTTPS forwarded by the reverse proxy
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# Other headers
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"
