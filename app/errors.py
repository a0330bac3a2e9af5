"""Domain errors raised by the ledger and rendered by the HTTP layer."""


class LedgerError(Exception):
    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "error": self.error,
            "statusCode": self.status_code,
        }


class ValidationFailed(LedgerError):
    status_code = 422
    error = "Unprocessable Entity"


class MissingFieldsError(ValidationFailed):
    def __init__(self):
        super().__init__('fields "id", "value" and "dateTime" are required')


class NonPositiveValueError(ValidationFailed):
    def __init__(self):
        super().__init__("transaction value must be greater than zero")


class FutureTransactionError(ValidationFailed):
    def __init__(self):
        super().__init__("transaction cannot occur in the future")


class TransactionNotFoundError(LedgerError):
    status_code = 404
    error = "Not Found"

    def __init__(self, txn_id: str):
        super().__init__("transaction not found")
        self.txn_id = txn_id


class DuplicateTransactionError(LedgerError):
    status_code = 409
    error = "Conflict"

    def __init__(self, txn_id: str):
        super().__init__("transaction id already exists")
        self.txn_id = txn_id
