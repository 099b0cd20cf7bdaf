"""
Error classes and error codes for LifePlanLab.

Malformed payloads at parsing boundaries raise :class:`ConfigError`. Domain
failures of plan and item operations are never raised; they are reported as
:class:`~lifeplanlab.core.results.OperationResult` values carrying an
:class:`ErrorCode`, which maps onto the coarse :class:`ErrorKind` taxonomy.
"""

from __future__ import annotations

from enum import Enum


class ConfigError(Exception):
    """
    Configuration error while parsing a state snapshot or a setting payload.

    **Common Causes:**
    - Missing required keys in a flow/stock setting mapping
    - Non-numeric values where amounts, years or rates are expected
    - Unknown frequency tags
    - A setting kind with no registered projection strategy

    **Example Usage:**
        ```python
        from lifeplanlab.core.errors import ConfigError
        from lifeplanlab.core.settings import FlowSetting

        try:
            FlowSetting.from_dict({"amount": 1000})  # startYear missing
        except ConfigError as e:
            print(f"Configuration error: {e}")
        ```
    """

    pass


class ErrorKind(Enum):
    """Coarse failure taxonomy shared by every core operation."""

    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    PROTECTED = "protected"
    FORMAT_ERROR = "format_error"
    DATA_INVALID = "data_invalid"


class ErrorCode(Enum):
    """Fine-grained failure codes returned by mutating operations."""

    INVALID_ITEM = "invalid_item"
    INVALID_CATEGORY = "invalid_category"
    INVALID_TYPE = "invalid_type"
    EMPTY_NAME = "empty_name"
    NAME_TOO_LONG = "name_too_long"
    ITEM_EXISTS = "item_exists"
    ITEM_NOT_FOUND = "item_not_found"
    NOT_FOUND = "not_found"
    DUPLICATE_NAME = "duplicate_name"
    CANNOT_DELETE_DEFAULT = "cannot_delete_default"
    CANNOT_RENAME_DEFAULT = "cannot_rename_default"
    PLAN_NOT_AVAILABLE = "plan_not_available"
    INVALID_ITEM_ID = "invalid_item_id"
    INVALID_SETTING = "invalid_setting"
    INVALID_FORM = "invalid_form"

    @property
    def kind(self) -> ErrorKind:
        return _CODE_KINDS[self]


_CODE_KINDS = {
    ErrorCode.INVALID_ITEM: ErrorKind.VALIDATION_ERROR,
    ErrorCode.INVALID_CATEGORY: ErrorKind.VALIDATION_ERROR,
    ErrorCode.INVALID_TYPE: ErrorKind.VALIDATION_ERROR,
    ErrorCode.EMPTY_NAME: ErrorKind.VALIDATION_ERROR,
    ErrorCode.NAME_TOO_LONG: ErrorKind.VALIDATION_ERROR,
    ErrorCode.INVALID_FORM: ErrorKind.VALIDATION_ERROR,
    ErrorCode.ITEM_EXISTS: ErrorKind.DUPLICATE,
    ErrorCode.DUPLICATE_NAME: ErrorKind.DUPLICATE,
    ErrorCode.ITEM_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.PLAN_NOT_AVAILABLE: ErrorKind.NOT_FOUND,
    ErrorCode.CANNOT_DELETE_DEFAULT: ErrorKind.PROTECTED,
    ErrorCode.CANNOT_RENAME_DEFAULT: ErrorKind.PROTECTED,
    ErrorCode.INVALID_ITEM_ID: ErrorKind.FORMAT_ERROR,
    ErrorCode.INVALID_SETTING: ErrorKind.DATA_INVALID,
}
