import pytest

from ocsf_codegen.utils import to_pascal_case, to_screaming_snake_case, to_snake_case


@pytest.mark.parametrize(
    "text, expected",
    [
        ("file_activity", "FileActivity"),
        ("HTTPRequest", "HttpRequest"),
        ("ipV4", "IpV4"),
        ("Windows NT", "WindowsNt"),
        ("SHA-256", "Sha256"),
        ("already Pascal", "AlreadyPascal"),
        ("", ""),
        ("***", ""),
    ],
)
def test_to_pascal_case(text, expected):
    assert to_pascal_case(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("activityId", "activity_id"),
        ("HTTPRequest", "http_request"),
        ("class_uid", "class_uid"),
        ("x-forwarded-for", "x_forwarded_for"),
        ("__dunder__", "dunder"),
        ("TimespanTypeId", "timespan_type_id"),
    ],
)
def test_to_snake_case(text, expected):
    assert to_snake_case(text) == expected


def test_to_screaming_snake_case():
    assert to_screaming_snake_case("ReputationScoreId") == "REPUTATION_SCORE_ID"
