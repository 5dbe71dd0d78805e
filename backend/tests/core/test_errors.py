"""Error Hierarchy — verifies status codes and response envelopes.

Tests:
    - Not-found errors are 404 with a descriptive message
    - Database errors are 503 and critical
    - Integrity violations are 409 and name the constraint
"""

from invoice_api.core.errors import (
    DatabaseError, ErrorCategory, ErrorContext, ErrorSeverity,
    IntegrityViolationError, InvoiceApiError, ResourceNotFoundError,
)


def test_not_found_error_message():
    err = ResourceNotFoundError("Invoice", "42", ErrorContext(invoice_id=42))
    assert err.http_status == 404
    assert err.category is ErrorCategory.RESOURCE_NOT_FOUND
    assert err.to_response() == {"message": "Invoice '42' not found"}
    assert err.context.invoice_id == 42


def test_database_error_is_critical_503():
    err = DatabaseError("Connection or operational error", "execute")
    assert err.http_status == 503
    assert err.severity is ErrorSeverity.CRITICAL
    assert err.operation == "execute"
    assert "execute" in err.message


def test_integrity_violation_names_constraint():
    err = IntegrityViolationError("invoices_status_check")
    assert err.http_status == 409
    assert err.code == "INTEGRITY_VIOLATION"
    assert err.category is ErrorCategory.DATABASE
    assert err.constraint == "invoices_status_check"
    assert err.to_response() == {
        "message": "Database commit failed: constraint 'invoices_status_check' violated",
    }


def test_integrity_violation_without_constraint_name():
    err = IntegrityViolationError(None)
    assert err.constraint is None
    assert "a table constraint" in err.message


def test_default_context_has_no_invoice():
    assert ResourceNotFoundError("Invoice", "1").context.invoice_id is None


def test_all_errors_share_base_class():
    assert issubclass(ResourceNotFoundError, InvoiceApiError)
    assert issubclass(DatabaseError, InvoiceApiError)
    assert issubclass(IntegrityViolationError, InvoiceApiError)
