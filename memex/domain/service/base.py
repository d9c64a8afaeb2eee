"""Base service class for domain services."""


class Service:
    """Base class for MemeX domain services.

    Services hold logic spanning several aggregates: voting touches a vote
    record and its post or comment, comment creation touches a post, a
    parent comment and the author.
    """

    pass
