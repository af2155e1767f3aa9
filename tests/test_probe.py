from __future__ import annotations

from r53_association.convergence.probe import (
    ProbeOutcome,
    classify_probe_error,
    probe_association,
)
from route53_fakes import VPC_ID, ZONE_ID, FakeRoute53Client, client_error, conflict_error

REQUEST = {
    "HostedZoneId": ZONE_ID,
    "VPC": {"VPCId": VPC_ID, "VPCRegion": "us-east-1"},
    "Comment": "test",
}


def test_successful_reassociation_means_pending() -> None:
    assert classify_probe_error(None, ZONE_ID, VPC_ID).outcome is ProbeOutcome.PENDING


def test_already_associated_conflict_means_converged() -> None:
    result = classify_probe_error(conflict_error(), ZONE_ID, VPC_ID)
    assert result.outcome is ProbeOutcome.CONVERGED
    assert result.error is None


def test_any_other_error_is_fatal() -> None:
    exc = client_error("NotAuthorizedException", "not authorized")
    result = classify_probe_error(exc, ZONE_ID, VPC_ID)
    assert result.outcome is ProbeOutcome.FATAL
    assert result.error is exc


def test_probe_association_reissues_request() -> None:
    client = FakeRoute53Client()
    client.associate_results = [conflict_error()]

    result = probe_association(client, REQUEST)

    assert result.outcome is ProbeOutcome.CONVERGED
    assert client.calls_to("associate_vpc_with_hosted_zone") == [REQUEST]


def test_probe_association_success_is_pending() -> None:
    client = FakeRoute53Client()

    assert probe_association(client, REQUEST).outcome is ProbeOutcome.PENDING
