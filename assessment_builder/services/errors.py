"""Error taxonomy of the template editor."""


class EditorError(Exception):
    status_code = 500

    def __init__(self, detail: str, status_code: int | None = None):
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class TemplateNotFoundError(EditorError):
    status_code = 404

    def __init__(self, template_id: str):
        super().__init__("Template not found.")
        self.template_id = template_id


class AuthorizationError(EditorError):
    status_code = 401

    def __init__(self, detail: str = "You must be signed in to save a template."):
        super().__init__(detail)


class StoreError(EditorError):
    """A backing-store call failed; `detail` is the store's own message."""

    status_code = 502


class DraftValidationError(EditorError):
    status_code = 422

    def __init__(self, errors: dict[str, str]):
        super().__init__("Template has validation errors.")
        self.errors = dict(errors)


class EditorStateError(EditorError):
    """Command issued while the session state forbids it."""

    status_code = 409
