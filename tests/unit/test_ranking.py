"""Unit tests for deduplication and ranking."""

from datetime import datetime, timezone

from florida_news.services.ranking import deduplicate, finalize, fingerprint


class TestFingerprint:
    """Tests for title fingerprints."""

    def test_case_and_punctuation_ignored(self):
        assert fingerprint("Florida Hemp Rules!") == fingerprint("florida hemp rules")

    def test_only_first_characters_count(self):
        head = "A" * 65
        assert fingerprint(head + " first ending") == fingerprint(head + " second ending")

    def test_punctuation_only_title(self):
        assert fingerprint("!!!") == "!!!"
        assert fingerprint("???") != fingerprint("!!!")


class TestDeduplicate:
    """Tests for first-seen-wins deduplication."""

    def test_near_duplicates_collapse(self, make_article):
        first = make_article("Florida Senate Passes Hemp Bill", label="FL Hemp")
        second = make_article("florida senate passes hemp bill.", label="FL Cannabis")

        assert deduplicate([first, second]) == [first]

    def test_distinct_titles_kept(self, make_article):
        articles = [make_article("One story"), make_article("Another story")]
        assert deduplicate(articles) == articles

    def test_difference_after_prefix_is_ignored(self, make_article):
        prefix = "Florida regulators approve new medical marijuana treatment centers in"
        first = make_article(prefix + " Miami")
        second = make_article(prefix + " Tampa")

        assert deduplicate([first, second]) == [first]


class TestFinalize:
    """Tests for payload assembly."""

    def test_sorted_newest_first(self, make_article):
        t1 = make_article("Story one", hours=10)
        t2 = make_article("Story two", hours=5)
        t3 = make_article("Story three", hours=20)

        payload = finalize([t1, t2, t3])

        assert list(payload.articles) == [t3, t1, t2]

    def test_ties_keep_input_order(self, make_article):
        articles = [make_article(f"Story {n}", hours=1) for n in range(5)]

        payload = finalize(articles)

        assert list(payload.articles) == articles

    def test_dedup_before_sort(self, make_article):
        older = make_article("Florida Hemp News", hours=1)
        newer_duplicate = make_article("FLORIDA HEMP NEWS!", hours=9)

        payload = finalize([older, newer_duplicate])

        assert list(payload.articles) == [older]

    def test_truncation(self, make_article):
        articles = [make_article(f"Distinct story number {n}", hours=n) for n in range(500)]

        payload = finalize(articles, max_articles=120)

        assert payload.count == 120
        assert len(payload.articles) == 120
        assert payload.articles[0].title == "Distinct story number 499"

    def test_default_limit(self, make_article):
        articles = [make_article(f"Distinct story number {n}") for n in range(150)]

        assert finalize(articles).count == 100

    def test_payload_fields(self, make_article):
        now = datetime(2024, 5, 1, tzinfo=timezone.utc)

        payload = finalize([make_article("Only story")], now=now)

        assert payload.ok is True
        assert payload.count == 1
        assert payload.fetched_at == now

    def test_empty(self):
        payload = finalize([])
        assert payload.ok is True
        assert payload.count == 0
        assert payload.articles == ()

    def test_to_dict(self, make_article):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        article = make_article("Only story", hours=1, source_name="Name", category="general")

        data = finalize([article], now=now).to_dict()

        assert data["ok"] is True
        assert data["count"] == 1
        assert data["fetchedAt"] == 1704067200000
        assert data["articles"][0]["publishedAt"] == 1704067200000 + 3600 * 1000
        assert data["articles"][0]["sourceLabel"] == "FL Cannabis"
        assert data["articles"][0]["sourceName"] == "Name"
        assert data["articles"][0]["category"] == "general"
        assert "sourceColor" not in data["articles"][0]
