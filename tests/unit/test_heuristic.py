"""Unit tests for the keyword fallback classifier."""

from datetime import datetime

import pytest

from campus_events.classifier.heuristic import FALLBACK_RATIONALE, HeuristicClassifier, tokenize
from campus_events.models import (
    FALLBACK_CONFIDENCE,
    Audience,
    Classification,
    EventCategory,
    LocationType,
    RawEvent,
)


def _event(title: str = "", description: str = "", location: str = "", date: str = "") -> RawEvent:
    return RawEvent(title=title, description=description, location=location, date=date)


class TestTokenize:
    """Test suite for tokenize."""

    def test_tokenize_uses_title_description_and_location_only(self) -> None:
        """Test that org and url don't contribute tokens."""
        event = RawEvent(
            title="Game Night!",
            description="Board games & PIZZA",
            location="Kresge Hall",
            org="Workshop Society",
            url="https://career.example.edu",
        )

        tokens = tokenize(event)

        assert {"game", "night", "board", "games", "pizza", "kresge", "hall"} <= tokens
        assert "workshop" not in tokens
        assert "career" not in tokens


class TestHeuristicCategory:
    """Test suite for category rules."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Python bootcamp", EventCategory.WORKSHOP),
            ("Summer internship info", EventCategory.CAREER),
            ("Welcome mixer", EventCategory.SOCIAL),
            ("Chess club meeting", EventCategory.CLUB_ORG),
            ("Beach cleanup volunteer day", EventCategory.VOLUNTEER),
            ("Physics colloquium", EventCategory.ACADEMIC),
            ("3v3 basketball tournament", EventCategory.SPORTS),
            ("Heritage month festival", EventCategory.CULTURAL),
            ("Study break", EventCategory.OTHER),
        ],
    )
    def test_keyword_groups(self, text: str, expected: EventCategory) -> None:
        """Test each keyword group maps to its category."""
        result = HeuristicClassifier().classify(_event(title=text))

        assert result.category == expected

    def test_workshop_beats_career(self) -> None:
        """Test that earlier rules take priority when several groups match."""
        result = HeuristicClassifier().classify(_event(title="Career workshop"))

        assert result.category == EventCategory.WORKSHOP

    def test_social_beats_club(self) -> None:
        """Test precedence between Social and Club/Org."""
        result = HeuristicClassifier().classify(_event(title="Club game night"))

        assert result.category == EventCategory.SOCIAL

    def test_keywords_match_whole_words_only(self) -> None:
        """Test that 'running' does not trigger the 'run' sports keyword."""
        result = HeuristicClassifier().classify(_event(title="Running late study hall"))

        assert result.category == EventCategory.OTHER


class TestHeuristicAudience:
    """Test suite for audience rules."""

    def test_undergrad_is_always_first(self) -> None:
        """Test the unconditional Undergrad entry."""
        result = HeuristicClassifier().classify(_event(title="Open mic"))

        assert result.audience == [Audience.UNDERGRAD]

    def test_audience_is_capped_at_three_in_order(self) -> None:
        """Test truncation keeps insertion order."""
        result = HeuristicClassifier().classify(
            _event(description="For graduate students, alumni, staff and the public")
        )

        assert result.audience == [Audience.UNDERGRAD, Audience.GRAD, Audience.ALUMNI]

    def test_public_and_community(self) -> None:
        """Test the Public keyword group."""
        result = HeuristicClassifier().classify(_event(description="Open to the community"))

        assert result.audience == [Audience.UNDERGRAD, Audience.PUBLIC]


class TestHeuristicLocation:
    """Test suite for location rules."""

    @pytest.mark.parametrize(
        ("location", "expected"),
        [
            ("Zoom", LocationType.VIRTUAL),
            ("Hybrid: Zoom + Kresge Hall", LocationType.VIRTUAL),
            ("Hybrid - Kresge Hall", LocationType.HYBRID),
            ("Kresge Hall", LocationType.ON_CAMPUS),
            ("Digital Arts Research Center", LocationType.ON_CAMPUS),
            ("Downtown Santa Cruz", LocationType.OFF_CAMPUS),
            ("", LocationType.OFF_CAMPUS),
        ],
    )
    def test_location_priority(self, location: str, expected: LocationType) -> None:
        """Test Virtual > Hybrid > On-campus > Off-campus."""
        result = HeuristicClassifier().classify(_event(location=location))

        assert result.location_type == expected


class TestHeuristicTags:
    """Test suite for tag rules."""

    def test_tags_in_rule_order(self) -> None:
        """Test the category tag comes first, then keyword tags."""
        result = HeuristicClassifier().classify(
            _event(title="Resume workshop", description="Free pizza for CS majors")
        )

        assert result.tags == ["workshop", "free", "food", "resume", "tech"]

    def test_other_category_adds_no_tag(self) -> None:
        """Test that Other is not used as a tag."""
        result = HeuristicClassifier().classify(_event(title="Study break", description="free snacks"))

        assert result.tags == ["free"]

    def test_club_org_tag_is_lowercased(self) -> None:
        """Test category tag lowercasing keeps the slash."""
        result = HeuristicClassifier().classify(_event(title="Club meeting"))

        assert result.tags == ["club/org"]


class TestHeuristicClassifier:
    """Test suite for whole-result properties."""

    def test_fixed_confidence_and_rationale(self, sample_raw_event: RawEvent) -> None:
        """Test degraded-mode markers."""
        result = HeuristicClassifier().classify(sample_raw_event)

        assert result.confidence == FALLBACK_CONFIDENCE == 0.25
        assert result.rationale == FALLBACK_RATIONALE

    def test_date_delegates_to_normalizer(self, fixed_now: datetime) -> None:
        """Test normalized_date comes from the raw date string."""
        result = HeuristicClassifier(tz=fixed_now.tzinfo).classify(
            _event(title="Talk", date="sept 26 6:00pm"), now=fixed_now
        )

        assert (result.normalized_date.month, result.normalized_date.day) == (9, 26)
        assert result.normalized_date.hour == 18

    def test_unparseable_date_uses_now(self, fixed_now: datetime) -> None:
        """Test normalized_date is never missing."""
        result = HeuristicClassifier().classify(_event(title="Talk", date="TBD"), now=fixed_now)

        assert result.normalized_date == fixed_now

    @pytest.mark.parametrize(
        "event",
        [
            RawEvent(),
            RawEvent(title="   "),
            RawEvent(title="!!!", description="???", location="@@@", date="@@"),
            RawEvent(
                title="workshop career game club volunteer lecture soccer film",
                description="graduate phd ms alumni staff public community free food pizza resume tech cs gds",
                location="zoom hybrid campus hall center theater lab",
                date="dec 31 11:59pm",
            ),
            RawEvent(title="ÉVÉNEMENT culturel", description="日本語のイベント", date="sept 99 99pm"),
        ],
    )
    def test_output_always_satisfies_schema(self, event: RawEvent) -> None:
        """Test that any input yields a schema-valid classification."""
        result = HeuristicClassifier().classify(event)

        revalidated = Classification.model_validate(result.model_dump())
        assert revalidated == result
        assert 1 <= len(result.audience) <= 3
        assert len(result.tags) <= 8
        assert all(tag == tag.lower() for tag in result.tags)
        assert len(result.tags) == len(set(result.tags))
        assert 0.0 <= result.confidence <= 1.0
        assert result.normalized_date is not None
