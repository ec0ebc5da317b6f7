import pytest

from formvalidator import DEFAULT_MESSAGES, ReferenceSets


@pytest.fixture
def messages():
    return dict(DEFAULT_MESSAGES)


@pytest.fixture
def references():
    return ReferenceSets.from_lists(
        country_codes=["us", "gb", "fr", "de", "jp"],
        currency_codes=["usd", "eur", "gbp", "jpy"],
        common_passwords=["password", "12345678", "iloveyou"],
        disposable_domains=["mailinator.com", "guerrillamail.com"],
        disposable_wildcards=["33mail.com"],
    )


@pytest.fixture
def check(messages):
    """Run a rule on values and return (is_valid, kind, args)."""

    def _check(rule, *values):
        result = rule.validate(list(values), messages)
        return result.is_valid, result.kind, result.args

    return _check
