"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/Permission
  2xxx: Local store
  3xxx: Catalog
  4xxx: Category
  5xxx: Account

Every error here is recoverable: callers turn it into an empty state, a
denial message or a discarded record. `message` is safe to show to the user.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


# --- 1xxx: Auth/Permission ---

class PermissionDeniedError(AppError):
    def __init__(self, action: str) -> None:
        super().__init__(1001, f"You do not have permission to {action}")


class CannotDeleteSelfError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "You cannot delete your own account")


# --- 2xxx: Local store ---

class StoreDecodeError(AppError):
    """A persisted value exists but is not valid JSON or has the wrong shape."""

    def __init__(self, key: str, detail: str = "") -> None:
        message = f"Stored value for {key!r} could not be decoded"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(2001, message)
        self.key = key


# --- 3xxx: Catalog ---

class CatalogLoadError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3001, f"Catalog could not be loaded: {detail}")


class ListingNotFoundError(AppError):
    def __init__(self, listing_id: int) -> None:
        super().__init__(3002, f"Listing not found: {listing_id}")


class CatalogNotLoadedError(AppError):
    """Listing edits need the working copy fetched from the served catalog first."""

    def __init__(self) -> None:
        super().__init__(3003, "Catalog is not loaded; reload the page before editing products")


# --- 4xxx: Category ---

class CategoryNotFoundError(AppError):
    def __init__(self, category_id: int) -> None:
        super().__init__(4001, f"Category not found: {category_id}")


class CategoryInUseError(AppError):
    def __init__(self, name: str, product_count: int) -> None:
        super().__init__(
            4002,
            f'Cannot delete category "{name}" because it has {product_count} products',
        )


# --- 5xxx: Account ---

class AccountNotFoundError(AppError):
    def __init__(self, account_id: int) -> None:
        super().__init__(5001, f"Account not found: {account_id}")
