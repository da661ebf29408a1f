# User-facing replies. All of them are sent ephemerally.

INVALID_PROOF_MESSAGE = "Please attach a valid image file as proof."
PERMISSION_DENIED_MESSAGE = "You do not have permission to use this command."
SESSION_NOT_FOUND_MESSAGE = "An error occurred: session data not found. Please try again."
LOG_CHANNEL_MISSING_MESSAGE = (
    "Error: The log channel could not be found. "
    "Please ask an admin to set it with `/setlogchannel`."
)
SUBMISSION_SUCCESS_MESSAGE = "Your event has been logged successfully! Thank you."
COMMAND_ERROR_MESSAGE = "A :bug: showed up while running this command."
