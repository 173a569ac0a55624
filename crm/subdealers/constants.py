# Sliding-window limits: (requests, window seconds), keyed per identifier
GST_FETCH_LIMIT = 20
GST_FETCH_WINDOW_SECONDS = 15 * 60

OTP_ISSUE_LIMIT = 5
OTP_ISSUE_WINDOW_SECONDS = 15 * 60

OTP_VERIFY_LIMIT = 10
OTP_VERIFY_WINDOW_SECONDS = 10 * 60

OTP_LENGTH = 6
OTP_TTL_SECONDS = 10 * 60
OTP_MAX_ATTEMPTS = 5

# rate limiter operation names
OP_GST_FETCH = "gst_fetch"
OP_OTP_ISSUE = "otp_issue"
OP_OTP_VERIFY = "otp_verify"
