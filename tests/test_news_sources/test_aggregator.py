import pytest
import requests
from unittest.mock import MagicMock

from headline_aggregator.services.news_sources.aggregator import AggregationPolicy, FallbackFeed
from headline_aggregator.services.news_sources.feed_extractor import FeedExtractor
from headline_aggregator.services.news_sources.fetcher import BROWSER_HEADERS, FEED_HEADERS, SourceFetcher
from headline_aggregator.services.news_sources.html_extractor import HtmlExtractor

from factories import BASE_URL, FEED_URLS, SITE_URL, failed, make_fetcher, ok, page, rss


def build_policy(fetcher, cutoff, feed_urls=FEED_URLS, threshold=10):
    return AggregationPolicy(
        fetcher=fetcher,
        html_extractor=HtmlExtractor(base_url=BASE_URL, years=[2024, 2023, 2022], cutoff=cutoff),
        feed_extractor=FeedExtractor(base_url=BASE_URL, cutoff=cutoff),
        site_url=SITE_URL,
        fallback_feeds=[FallbackFeed.from_url(url) for url in feed_urls],
        cutoff=cutoff,
        fallback_threshold=threshold,
        primary_timeout_seconds=30,
        feed_timeout_seconds=15,
    )


def assert_result_invariants(records, cutoff):
    urls = [record.url for record in records]
    assert len(urls) == len(set(urls))
    assert all(record.publish_date >= cutoff for record in records)
    dates = [record.publish_date for record in records]
    assert dates == sorted(dates, reverse=True)


def test_fallback_feed_from_url():
    feed = FallbackFeed.from_url("https://feeds.feedburner.com/TheVerge")

    assert feed.name == "TheVerge"
    assert feed.source == "feed:TheVerge"


class TestAggregationPolicy:
    def test_enough_scraped_articles_skip_feeds(self, cutoff):
        anchors = [
            f'<a href="/2024/1/{day}/{day}/story">Story number {day} headline</a>'
            for day in range(1, 11)
        ]
        fetcher = make_fetcher({SITE_URL: ok(SITE_URL, page(*anchors))})

        records = build_policy(fetcher, cutoff).run()

        assert len(records) == 10
        assert fetcher.fetch.call_count == 1
        fetcher.fetch.assert_called_once_with(SITE_URL, 30, BROWSER_HEADERS)
        assert records[0].title == "Story number 10 headline"
        assert_result_invariants(records, cutoff)

    def test_few_scraped_articles_merge_with_feeds(self, cutoff, front_page_html, feed_xml):
        fetcher = make_fetcher({
            SITE_URL: ok(SITE_URL, front_page_html),
            FEED_URLS[0]: ok(FEED_URLS[0], feed_xml),
            FEED_URLS[1]: ok(FEED_URLS[1], feed_xml),
        })

        records = build_policy(fetcher, cutoff).run()

        assert [record.url for record in records] == [
            "https://www.theverge.com/2024/6/1/1/june",
            "https://www.theverge.com/2024/5/10/24153/first-story",
            "https://www.theverge.com/2024/3/1/1/march",
            "https://www.theverge.com/2023/8/1/1/august",
            "https://www.theverge.com/2023/1/2/5555/second-story",
            "https://www.theverge.com/2022/3/4/333/third-story",
        ]
        # duplicates across feeds keep the first feed's record
        assert records[0].source == "feed:index.xml"
        assert_result_invariants(records, cutoff)

    def test_scraped_record_wins_over_feed_duplicate(self, cutoff, front_page_html):
        feed = rss((
            "Feed copy of the first story",
            "https://www.theverge.com/2024/5/10/24153/first-story",
            "Fri, 10 May 2024 15:00:00 GMT",
        ))
        fetcher = make_fetcher({
            SITE_URL: ok(SITE_URL, front_page_html),
            FEED_URLS[0]: ok(FEED_URLS[0], feed),
        })

        records = build_policy(fetcher, cutoff).run()

        first = next(record for record in records if record.url.endswith("first-story"))
        assert first.title == "First story headline here"
        assert first.source == "primary"

    def test_no_scraped_articles_yields_feed_entries(self, cutoff, feed_xml):
        fetcher = make_fetcher({
            SITE_URL: ok(SITE_URL, page("<p>Enable JavaScript</p>")),
            FEED_URLS[0]: ok(FEED_URLS[0], feed_xml),
        })

        records = build_policy(fetcher, cutoff, feed_urls=FEED_URLS[:1]).run()

        assert [record.title for record in records] == [
            "Feed story from June",
            "Feed story from March",
            "Feed story from August",
        ]

    def test_primary_timeout_and_failed_feed_fall_through_to_next_feed(self, cutoff):
        second_feed = rss(
            ("Middle story", "https://www.theverge.com/2024/2/2/1/middle", "Fri, 02 Feb 2024 10:00:00 GMT"),
            ("Newest story", "https://www.theverge.com/2024/4/4/1/newest", "Thu, 04 Apr 2024 10:00:00 GMT"),
            ("Oldest story", "https://www.theverge.com/2023/3/3/1/oldest", "Fri, 03 Mar 2023 10:00:00 GMT"),
        )
        fetcher = make_fetcher({
            SITE_URL: failed(SITE_URL),
            FEED_URLS[0]: failed(FEED_URLS[0], "HTTP 500", 500),
            FEED_URLS[1]: ok(FEED_URLS[1], second_feed),
        })

        records = build_policy(fetcher, cutoff).run()

        assert [record.title for record in records] == ["Newest story", "Middle story", "Oldest story"]
        assert all(record.source == "feed:front-page" for record in records)
        assert [call.args for call in fetcher.fetch.call_args_list] == [
            (SITE_URL, 30, BROWSER_HEADERS),
            (FEED_URLS[0], 15, FEED_HEADERS),
            (FEED_URLS[1], 15, FEED_HEADERS),
        ]

    def test_unreadable_feed_does_not_stop_remaining_feeds(self, cutoff, feed_xml):
        fetcher = make_fetcher({
            SITE_URL: failed(SITE_URL),
            FEED_URLS[0]: ok(FEED_URLS[0], '{"not": "a feed"'),
            FEED_URLS[1]: ok(FEED_URLS[1], feed_xml),
        })

        records = build_policy(fetcher, cutoff).run()

        assert len(records) == 3
        assert all(record.source == "feed:front-page" for record in records)

    def test_every_source_failing_yields_empty_list(self, cutoff):
        fetcher = make_fetcher({})

        assert build_policy(fetcher, cutoff).run() == []
        assert fetcher.fetch.call_count == 1 + len(FEED_URLS)

    def test_ties_keep_extraction_order(self, cutoff):
        html = page(
            '<a href="/2024/7/7/1/alpha">Alpha story on the same day</a>',
            '<a href="/2024/7/7/2/beta">Beta story on the same day</a>',
        )
        fetcher = make_fetcher({SITE_URL: ok(SITE_URL, html)})

        records = build_policy(fetcher, cutoff, feed_urls=[]).run()

        assert [record.title for record in records] == [
            "Alpha story on the same day",
            "Beta story on the same day",
        ]

    def test_feed_copy_with_fragment_is_deduped_against_scraped_record(self, cutoff):
        html = page('<a href="/2024/1/1/1/story">Scraped story headline text</a>')
        feed = rss(
            ("Feed copy of the story", "https://www.theverge.com/2024/1/1/1/story#comments",
             "Mon, 01 Jan 2024 10:00:00 GMT"),
            ("Relative feed story", "/2024/1/2/2/rel", "Tue, 02 Jan 2024 10:00:00 GMT"),
        )
        fetcher = make_fetcher({
            SITE_URL: ok(SITE_URL, html),
            FEED_URLS[0]: ok(FEED_URLS[0], feed),
        })

        records = build_policy(fetcher, cutoff, feed_urls=FEED_URLS[:1]).run()

        assert [(record.url, record.source) for record in records] == [
            ("https://www.theverge.com/2024/1/2/2/rel", "feed:index.xml"),
            ("https://www.theverge.com/2024/1/1/1/story", "primary"),
        ]
        assert_result_invariants(records, cutoff)


def test_utf8_page_served_without_charset_keeps_titles_intact(cutoff):
    body = page(
        '<a href="/2024/3/5/1/cafe">Apple’s café launch event</a>'
    ).replace("<head>", '<head><meta charset="utf-8">')
    response = requests.Response()
    response.status_code = 200
    response.url = SITE_URL
    response.headers["Content-Type"] = "text/html"
    response.encoding = requests.utils.get_encoding_from_headers(response.headers)
    response._content = body.encode("utf-8")
    session = MagicMock()
    session.get.return_value = response

    records = build_policy(SourceFetcher(session=session), cutoff, feed_urls=[]).run()

    assert [record.title for record in records] == ["Apple’s café launch event"]
