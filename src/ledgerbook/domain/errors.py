"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def company_not_found(company: int | str) -> str:
    """Return message for missing company."""
    if isinstance(company, int):
        return f"Company {company} not found"
    return f"Company '{company}' not found"


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account '{account_id}' not found"


def entry_not_found(entry_id: str) -> str:
    """Return message for missing journal entry."""
    return f"Journal entry '{entry_id}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction line."""
    return f"Transaction {transaction_id} not found"


def duplicate_account_id(account_id: str) -> str:
    """Return message for an account code that is already in use."""
    return f"Account ID '{account_id}' already exists. Please use a unique ID."


def unbalanced_entry() -> str:
    """Return message for a journal entry whose sides do not match."""
    return "Total debit and credit must balance and must not be zero"


def unknown_account_reference(transaction_id: int | None, account_id: str) -> str:
    """Return message for a transaction pointing at a missing account."""
    return (
        f"Transaction {transaction_id if transaction_id is not None else '(new)'} "
        f"references unknown account '{account_id}'"
    )


def account_delete_blocked(account_id: str, transaction_count: int) -> str:
    """Return message when an account is still referenced by transactions."""
    return (
        f"Cannot delete account '{account_id}': it has {transaction_count} "
        f"transaction{'s' if transaction_count != 1 else ''}. "
        "Please delete or move them first."
    )
