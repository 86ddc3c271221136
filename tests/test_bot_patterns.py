"""Unit tests for the automated-client pattern matcher."""

import re

import pytest

from app.core.bot_patterns import BotPatternMatcher, build_bot_matcher


@pytest.mark.parametrize(
    "user_agent",
    [
        "Googlebot/2.1 (+http://www.google.com/bot.html)",
        "curl/7.68.0",
        "python-requests/2.31.0",
        "Mozilla/5.0 (compatible; GPTBot/1.0; +https://openai.com/gptbot)",
        "Mozilla/5.0 HeadlessChrome/120.0.0.0 Safari/537.36",
        "facebookexternalhit/1.1",
        "Wget/1.21.3 (linux-gnu)",
        "sqlmap/1.7.2#stable (https://sqlmap.org)",
        "Scrapy/2.11.0 (+https://scrapy.org)",
        "Go-http-client/1.1",
    ],
)
def test_known_automated_clients_match(user_agent: str) -> None:
    assert BotPatternMatcher().first_match(user_agent) is not None


@pytest.mark.parametrize(
    "user_agent",
    [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Safari/605.1.15",
        "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0",
        "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1",
    ],
)
def test_real_browsers_do_not_match(user_agent: str) -> None:
    assert BotPatternMatcher().first_match(user_agent) is None


def test_matching_is_case_insensitive() -> None:
    matcher = BotPatternMatcher(["crawler"])

    assert matcher.first_match("Some-CRAWLER/1.0") == "crawler"
    assert matcher.first_match("some-crawler/1.0") == "crawler"


def test_empty_user_agent_matches() -> None:
    assert BotPatternMatcher().first_match("") == "^$"


def test_first_match_reports_pattern() -> None:
    matcher = BotPatternMatcher(["wget", "curl"])

    assert matcher.first_match("curl/8.0") == "curl"
    assert matcher.first_match("Mozilla/5.0") is None


def test_build_appends_extra_patterns() -> None:
    matcher = build_bot_matcher(["my-internal-agent"])

    assert matcher.first_match("Mozilla/5.0 my-internal-agent/3") == "my-internal-agent"
    assert matcher.first_match("Googlebot/2.1") == "bot"


def test_first_match_follows_pattern_order() -> None:
    matcher = BotPatternMatcher(["wget", "curl"])

    assert matcher.first_match("curl wget") == "wget"


def test_invalid_extra_pattern_raises() -> None:
    with pytest.raises(re.error):
        build_bot_matcher(["(unclosed"])
