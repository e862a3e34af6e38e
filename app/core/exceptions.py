class GroupsException(Exception):
    """Base application error."""
    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(GroupsException):
    """A referenced record does not exist."""
    status_code = 404


class PostNotFoundError(NotFoundError):
    def __init__(self, post_id):
        super().__init__(f"Post {post_id} not found", code="post_not_found")


class GroupNotFoundError(NotFoundError):
    def __init__(self, group_id):
        super().__init__(f"Group {group_id} not found", code="group_not_found")
