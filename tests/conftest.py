import pytest
from datetime import datetime, timezone

from headline_aggregator.config import Settings

from factories import BASE_URL, FEED_URLS, SITE_URL, page, rss


@pytest.fixture
def cutoff():
    return datetime(2022, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        site_url=SITE_URL,
        site_base_url=BASE_URL,
        fallback_feed_urls=FEED_URLS,
        tracked_years=[2022, 2024, 2023],
        cache_duration_minutes=30,
        fallback_threshold=10,
        log_format="text",
    )


@pytest.fixture
def front_page_html():
    return page(
        '<article><h2><a href="/2024/5/10/24153/first-story">First story headline here</a></h2></article>',
        '<div class="c-story-card"><a href="/2023/1/2/5555/second-story"><img src="x.png"></a>'
        '<h3>Second story about gadgets</h3></div>',
        '<a href="https://www.theverge.com/2022/3/4/333/third-story#comments">Third story with an absolute link</a>',
        '<a href="/2024/about">About the 2024 awards coverage</a>',
        '<a href="/2024/5/11/999/short">Tiny</a>',
    )


@pytest.fixture
def feed_xml():
    return rss(
        ("Feed story from June", "https://www.theverge.com/2024/6/1/1/june", "Sat, 01 Jun 2024 12:00:00 GMT"),
        ("Feed story from March", "https://www.theverge.com/2024/3/1/1/march", "Fri, 01 Mar 2024 08:30:00 GMT"),
        ("Feed story from August", "https://www.theverge.com/2023/8/1/1/august", "Tue, 01 Aug 2023 09:00:00 GMT"),
    )
