# error.py
# Errors raised by the outer layers (settings, UI). The state machine and
# MathEngine never raise; they fall back to no-ops and empty results.


class CalculatorError(Exception):
    def __init__(self, message, code="9999", detail=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.detail = detail

    def __str__(self):
        return f"Error {self.code}: {self.message}"


class ConfigurationError(CalculatorError):
    pass


class UIError(CalculatorError):
    pass


Error_Dictionary = {

    "1" : "Missing Files",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number

ERROR_MESSAGES = {
    "1000" : "Required file missing: ", # + file name

    "4000" : "Clipboard unavailable.",
    "4001" : "Nothing to paste.",

    "5000" : "Unknown setting: ", # + key
    "5001" : "Setting must be True or False: ", # + key
    "5002" : "Setting must be a whole number: ", # + key
    "5003" : "Setting out of range: ", # + key
    "5004" : "Settings file could not be written.",

    "9999" : "Unexpected Error: " #+error
}


def message_for(code):
    """Return the message text for a 4-digit code, or the generic fallback."""
    return ERROR_MESSAGES.get(code, ERROR_MESSAGES["9999"])


def category_for(code):
    """Return the category name for a 4-digit code (first digit)."""
    return Error_Dictionary.get(str(code)[:1], Error_Dictionary["9"])
