from sharing.domain.entities import InviteError

INVITE_ERROR_MESSAGES: dict[InviteError, str] = {
    InviteError.USER_NOT_FOUND: (
        "This email is not registered yet; ask them to sign in once with a magic link"
    ),
    InviteError.NOT_OWNER: "You are not the owner of this document",
    InviteError.INVALID_ROLE: "Invalid role",
    InviteError.CANNOT_INVITE_OWNER: "The document owner cannot be invited as a member",
}


def describe_invite_error(error: InviteError | str) -> str:
    if isinstance(error, InviteError):
        return INVITE_ERROR_MESSAGES[error]
    return error
