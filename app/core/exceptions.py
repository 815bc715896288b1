"""Authentication errors raised by services and mapped to HTTP responses in app.main."""


class AuthError(Exception):
    """Base class for auth failures; carries the HTTP status the API responds with."""

    status_code = 400
    default_message = "Authentication error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UserNotFoundError(AuthError):
    status_code = 404
    default_message = "User not found."


class UserAlreadyExistsError(AuthError):
    status_code = 409
    default_message = "User already exists."


class RefreshTokenNotFoundError(AuthError):
    status_code = 404
    default_message = "Refresh token not found."


class RefreshTokenInvalidError(AuthError):
    status_code = 401
    default_message = "Refresh token is invalid."


class InvalidCredentialsError(AuthError):
    status_code = 401
    default_message = "Invalid email or password."


class InvalidAccessTokenError(AuthError):
    status_code = 401
    default_message = "Invalid or expired token."
