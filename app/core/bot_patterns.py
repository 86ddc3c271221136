"""User-agent patterns identifying automated clients.

Patterns are regular expressions matched case-insensitively anywhere in the
user agent. Any match rejects the request.
"""

from __future__ import annotations

import re
from typing import Iterable

DEFAULT_BOT_PATTERNS: tuple[str, ...] = (
    # Generic bot terms
    r"bot", r"crawler", r"spider", r"scraper",
    # Search engine crawlers
    r"googlebot", r"bingbot", r"slurp", r"baiduspider", r"yandexbot",
    r"ccbot", r"yeti", r"sogou",
    # SEO and analytics crawlers
    r"ahrefsbot", r"semrushbot", r"mj12bot", r"dotbot",
    r"screaming frog", r"botify", r"jetoctopus", r"netpeak",
    r"contentking", r"exabot", r"swiftbot",
    # Social media crawlers
    r"facebookexternalhit", r"twitterbot", r"linkedinbot",
    r"slackbot", r"pinterestbot", r"whatsapp", r"telegrambot",
    # AI/ML data crawlers
    r"gptbot", r"chatgpt-user", r"oai-searchbot", r"claudebot",
    r"anthropic-ai", r"perplexitybot", r"openaibot",
    # Monitoring and uptime services
    r"pingdom", r"uptimerobot", r"betterstack", r"cron-job",
    r"site24x7", r"statuscake", r"monitis",
    # Security scanners
    r"censys", r"shodan", r"bitsight", r"nessus", r"openvas",
    r"nmap", r"masscan", r"sqlmap", r"nikto",
    # Scraping tools
    r"scrapy", r"beautifulsoup", r"selenium", r"puppeteer",
    r"parsehub", r"octoparse", r"80legs", r"visual scraper",
    r"scrapebox", r"webscraper", r"import.io",
    # Scripting HTTP clients and API tools
    r"curl", r"wget", r"httpie", r"python-requests",
    r"postman", r"insomnia", r"restclient", r"apache-httpclient",
    r"java", r"go-http-client", r"node-fetch", r"axios",
    # Headless browsers and automation
    r"phantomjs", r"headless", r"chrome-headless", r"playwright",
    r"zombie", r"jsdom",
    # Archive and research crawlers
    r"archive.org", r"wayback", r"heritrix", r"nutch",
    # Attack tooling
    r"hack", r"scan", r"exploit", r"penetration", r"attack",
    r"dirbuster", r"gobuster", r"dirb",
    # Empty user agent
    r"^$",
)


class BotPatternMatcher:
    """Compiled, immutable set of user-agent patterns.

    Build once at startup and share; matching does not mutate state.
    """

    def __init__(self, patterns: Iterable[str] = DEFAULT_BOT_PATTERNS) -> None:
        self._patterns: tuple[re.Pattern[str], ...] = tuple(
            re.compile(pattern, re.IGNORECASE) for pattern in patterns
        )

    def first_match(self, user_agent: str) -> str | None:
        """Return the source of the first pattern found in ``user_agent``, or None."""
        for p in self._patterns:
            if p.search(user_agent):
                return p.pattern
        return None


def build_bot_matcher(extra_patterns: Iterable[str] = ()) -> BotPatternMatcher:
    """Compile the default patterns plus any configured extras.

    Raises:
        re.error: If a configured pattern is not a valid regular expression.
    """
    return BotPatternMatcher((*DEFAULT_BOT_PATTERNS, *extra_patterns))
