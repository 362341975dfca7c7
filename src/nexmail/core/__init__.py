# =============================================================================
# NexMail Core Module
# =============================================================================
# Core domain models for NexMail. These are pure Python dataclasses and
# enums with no external dependencies, so they can be imported anywhere
# without causing circular imports.
#
#   - EmailContent: The read-only view the classifier works on
#   - Email: A stored email record with flags and triage results
#   - EmailFlags, Mailbox, Category: Supporting enums
# =============================================================================

from nexmail.core.email import Category, Email, EmailContent, EmailFlags, Mailbox

__all__ = [
    "Category",
    "Email",
    "EmailContent",
    "EmailFlags",
    "Mailbox",
]
