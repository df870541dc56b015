"""Tests for result code interpretation."""

from __future__ import annotations

from evidencecore.results import (
    ErrorCode,
    EventCode,
    Outcome,
    interpret_create_event,
    interpret_update_event,
)

ADDRESS = "0x" + "12" * 20


def test_event_code_decode():
    """Test raw codes decode into the closed enumeration."""
    assert EventCode.decode(0) is EventCode.SUCCESS
    assert EventCode.decode(500401) is EventCode.ILLEGAL_INPUT
    assert EventCode.decode(42) is EventCode.UNKNOWN


def test_error_code_outcomes():
    """Test every error code maps onto the taxonomy."""
    assert ErrorCode.SUCCESS.outcome is Outcome.SUCCESS
    assert ErrorCode.TRANSACTION_TIMEOUT.outcome is Outcome.TIMEOUT
    assert ErrorCode.TRANSACTION_EXECUTE_ERROR.outcome is Outcome.EXECUTION_FAILURE
    assert ErrorCode.CREDENTIAL_EVIDENCE_BASE_ERROR.outcome is Outcome.DECODING_FAILURE
    assert (
        ErrorCode.CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_ILLEGAL_INPUT.outcome
        is Outcome.CONTRACT_REJECTION
    )
    for code in ErrorCode:
        assert code.message


def test_carries_transaction():
    assert not ErrorCode.TRANSACTION_TIMEOUT.carries_transaction
    assert not ErrorCode.TRANSACTION_EXECUTE_ERROR.carries_transaction
    assert ErrorCode.CREDENTIAL_EVIDENCE_BASE_ERROR.carries_transaction
    assert ErrorCode.SUCCESS.carries_transaction


def test_create_event_success():
    assert interpret_create_event(0, ADDRESS) is ErrorCode.SUCCESS


def test_create_event_illegal_input():
    assert (
        interpret_create_event(500401, ADDRESS)
        is ErrorCode.CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_ILLEGAL_INPUT
    )


def test_create_event_unknown_code_is_rejection():
    """Test any other non-success code fails the creation."""
    code = interpret_create_event(7, ADDRESS)
    assert code is ErrorCode.CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_UNKNOWN
    assert code.outcome is Outcome.CONTRACT_REJECTION


def test_create_event_without_address():
    """Test a success code with no address is a decoding failure."""
    assert interpret_create_event(0, None) is ErrorCode.CREDENTIAL_EVIDENCE_BASE_ERROR
    assert interpret_create_event(0, "0x" + "0" * 40) is ErrorCode.CREDENTIAL_EVIDENCE_BASE_ERROR


def test_update_event():
    """Test only illegal input is reported as a rejection for updates."""
    assert interpret_update_event(0) is ErrorCode.SUCCESS
    assert (
        interpret_update_event(500401)
        is ErrorCode.CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_ILLEGAL_INPUT
    )
    assert interpret_update_event(99) is ErrorCode.SUCCESS
