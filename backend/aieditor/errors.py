"""Error taxonomy for editor actions.

Every error carries a short ``user_message`` that the orchestrators post to
the status board; the workspace stays usable after any of them.
"""


class EditorError(Exception):
    """Base class for recoverable editor failures"""

    user_message = "Something went wrong. Please try again."

    def __init__(self, detail: str = "", user_message: str | None = None):
        super().__init__(detail or self.user_message)
        self.detail = detail
        if user_message is not None:
            self.user_message = user_message


class ValidationError(EditorError):
    user_message = "Invalid input."


class EmptyInstructionError(ValidationError):
    user_message = "Please enter a description of the change."


class TransportError(EditorError):
    user_message = "Could not reach the AI service. Please try again."


class MalformedResponseError(EditorError):
    user_message = "The AI returned an invalid response. Please try again."


class FileImportError(EditorError):
    user_message = "Could not read the uploaded file."


class ExportError(EditorError):
    user_message = "Export failed."


class DuplicateNameError(ValidationError):
    user_message = "Another file already uses that name."
