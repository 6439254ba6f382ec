"""
Gym business settings.

Amounts are always stored in cents; GYM_CURRENCY is only used when rendering
them in audit descriptions.
"""
import environ

env = environ.Env()

GYM_CURRENCY = env("GYM_CURRENCY", default="PEN")

# Receipt image URLs come straight from the front-end upload widget
GYM_RECEIPT_URL_MAX_LENGTH = env.int("GYM_RECEIPT_URL_MAX_LENGTH", default=255)

# Public "I already paid" submissions (members paying by phone wallet / transfer)
GYM_PUBLIC_PAYMENT_METHOD = env("GYM_PUBLIC_PAYMENT_METHOD", default="yape")
GYM_PUBLIC_REFERENCE_PREFIX = env("GYM_PUBLIC_REFERENCE_PREFIX", default="YAPE")
