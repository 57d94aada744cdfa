from clutch.models.matchers import SourceMatcher

SLACK = ("Slack", "com.tinyspeck.slackmacgap")
DISCORD = ("Discord", "com.discord")


def test_matches_exact_name():
    match = SourceMatcher(exact_name="Slack")
    assert match.evaluate(*SLACK)
    assert not match.evaluate(*DISCORD)


def test_exact_name_is_case_sensitive():
    assert not SourceMatcher(exact_name="slack").evaluate(*SLACK)


def test_matches_exact_identifier():
    match = SourceMatcher(exact_identifier="com.tinyspeck.slackmacgap")
    assert match.evaluate(*SLACK)
    assert not match.evaluate(*DISCORD)


def test_persisted_field_names():
    match = SourceMatcher.model_validate({"name": "Slack", "bundle_id": "com.other"})
    assert match.exact_name == "Slack"
    assert match.exact_identifier == "com.other"


def test_matches_regex_pattern():
    match = SourceMatcher(pattern="^Slack.*")
    assert match.evaluate("Slack", "com.tinyspeck.slackmacgap")
    assert match.evaluate("SlackBeta", "com.tinyspeck.slackmacgap.beta")
    assert not match.evaluate(*DISCORD)


def test_pattern_is_case_sensitive_unless_flagged():
    assert SourceMatcher(pattern=".*Mail.*").evaluate("Apple Mail", "com.apple.mail")
    assert not SourceMatcher(pattern=".*Mail.*").evaluate("Airmail", "it.bloop.airmail2")
    assert SourceMatcher(pattern="(?i).*mail.*").evaluate("Airmail", "it.bloop.airmail2")


def test_no_fields_never_matches():
    assert not SourceMatcher().evaluate(*SLACK)


def test_invalid_regex_does_not_match():
    match = SourceMatcher(pattern="[invalid")
    assert match.regex is None
    assert not match.evaluate(*SLACK)


def test_name_takes_precedence_over_identifier():
    match = SourceMatcher(exact_name="Slack", exact_identifier="com.different.app")
    assert match.evaluate(*SLACK)


def test_empty_name_only_matches_empty_name():
    match = SourceMatcher(exact_name="")
    assert not match.evaluate(*SLACK)
    assert match.evaluate("", "com.unnamed")
