"""
Cache key management.

Centralized cache key definitions so writes and invalidations agree on
naming.
"""


class CacheKeys:
    """
    Centralized cache key definitions.

    Naming convention: {domain}:{id}:{view}

    Examples:
        - user:12:profile -> Rendered profile aggregate of user 12
        - user:12:education -> User 12's education list
        - oauth:state:<token> -> Pending login state
    """

    PREFIX_USER = "user"
    PREFIX_OAUTH = "oauth"

    @staticmethod
    def user_profile(user_id: int) -> str:
        """Cache key for the user's profile view."""
        return f"user:{user_id}:profile"

    @staticmethod
    def user_education(user_id: int) -> str:
        """Cache key for the user's education list view."""
        return f"user:{user_id}:education"

    @staticmethod
    def oauth_state(state: str) -> str:
        """Cache key for a pending OAuth login state."""
        return f"oauth:state:{state}"

    # Pattern keys for bulk invalidation
    @staticmethod
    def user_pattern(user_id: int) -> str:
        """Pattern to match all cached views for a user."""
        return f"user:{user_id}:*"
