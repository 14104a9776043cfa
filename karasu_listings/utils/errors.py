"""Error handling utilities."""


class KarasuListingsError(Exception):
    """Base exception for the listings backend."""
    pass


class SupabaseError(KarasuListingsError):
    """Supabase operation error."""
    pass


class ListingParseError(KarasuListingsError):
    """A listing row could not be converted into a Listing."""
    pass


class PaginationError(KarasuListingsError):
    """Invalid page size passed to the paginator."""
    pass
