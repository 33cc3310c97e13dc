# foodconnect/core/locales.py

# Error messages
ERROR_INVALID_CREDENTIALS = "Invalid email or password"
ERROR_EMAIL_TAKEN = "User with this email already exists"
ERROR_ACCOUNT_PENDING = "Your account is pending admin approval. Please wait for approval before logging in."
ERROR_ACCOUNT_REJECTED = "Your account has been rejected. Please contact support for more information."
ERROR_ACCOUNT_SUSPENDED = "Your account has been suspended. Please contact support."
ERROR_ACCOUNT_NOT_ACTIVE = "Account is not active"
ERROR_INVALID_TOKEN = "Invalid or expired token"
ERROR_USER_NOT_FOUND = "User not found"
ERROR_CAMPAIGN_NOT_FOUND = "Campaign not found"
ERROR_APPLICATION_NOT_FOUND = "Application not found"
ERROR_CONTENT_NOT_FOUND = "Content not found"
ERROR_PAYMENT_NOT_FOUND = "Payment not found"
ERROR_MESSAGE_NOT_FOUND = "Message not found"
ERROR_ACCESS_DENIED = "Access denied"
ERROR_RESTAURANT_PROFILE_MISSING = "Restaurant profile not found"
ERROR_INFLUENCER_PROFILE_MISSING = "Influencer profile not found"

LOGIN_STATUS_ERRORS = {
    "pending": ERROR_ACCOUNT_PENDING,
    "rejected": ERROR_ACCOUNT_REJECTED,
    "suspended": ERROR_ACCOUNT_SUSPENDED,
}

# Success messages
SUCCESS_REGISTERED = "Registration successful. Please check your email to verify your account and wait for admin approval."
SUCCESS_EMAIL_VERIFIED = "Email verified successfully."
SUCCESS_RESET_SENT = "Password reset instructions have been sent to your email."
SUCCESS_PASSWORD_RESET = "Password has been reset successfully."
SUCCESS_LOGGED_OUT = "Logged out successfully."
