"""Tests for the five content detectors."""

from postguard.moderation.detectors import (
    PersonalInfoDetector,
    ProfanityDetector,
    SentimentAnalyzer,
    SpamDetector,
    ToxicityDetector,
)
from postguard.moderation.detectors.toxicity import HATE_SPEECH, VIOLENCE
from postguard.moderation.models import Severity


# --- Profanity ---


def test_profanity_detects_and_reports_canonical_word():
    result = ProfanityDetector().check("What the fuck is this")
    assert result.is_profane
    assert result.profane_words == ["fuck"]
    assert result.clean_text != "What the fuck is this"

    flags = result.to_flags()
    assert len(flags) == 1
    assert flags[0].type == "profanity"
    assert flags[0].severity == Severity.MEDIUM
    assert flags[0].confidence == 0.9
    assert flags[0].flagged_text == "fuck"


def test_profanity_clean_text_passes():
    result = ProfanityDetector().check("Hello world, lovely day for a launch")
    assert not result.is_profane
    assert result.profane_words == []
    assert result.clean_text == "Hello world, lovely day for a launch"
    assert result.to_flags() == []


def test_profanity_allows_business_homographs():
    result = ProfanityDetector().check("Our class analysis assistant is ready")
    assert not result.is_profane


def test_profanity_can_be_flagged_without_reported_words():
    # Blocked by the lexicon but outside the small reporting set.
    result = ProfanityDetector().check("what a cunt")
    assert result.is_profane
    assert result.profane_words == []
    assert result.to_flags()[0].flagged_text == ""


def test_profanity_add_and_remove_words():
    detector = ProfanityDetector()
    assert not detector.check("this synergy is great").is_profane

    detector.add_words(["synergy"])
    assert detector.check("this synergy is great").is_profane

    detector.remove_words(["synergy"])
    assert not detector.check("this synergy is great").is_profane


# --- Sentiment ---


def test_sentiment_negative_text_flags_low():
    result = SentimentAnalyzer().analyze("This is a terrible, awful, horrible product")
    assert result.score < 0
    assert result.comparative < -0.3
    assert "terrible" in result.negative

    flags = result.to_flags()
    assert len(flags) == 1
    assert flags[0].type == "negative_sentiment"
    assert flags[0].severity == Severity.LOW
    assert 0.0 <= flags[0].confidence <= 1.0


def test_sentiment_business_labels_override_lexicon():
    analyzer = SentimentAnalyzer()
    assert analyzer.analyze("good").score == 1
    assert analyzer.analyze("innovative growth").score == 4


def test_sentiment_positive_text_not_flagged():
    result = SentimentAnalyzer().analyze("An excellent, innovative and reliable solution")
    assert result.score > 0
    assert result.comparative > 0
    assert set(result.positive) >= {"excellent", "innovative", "reliable", "solution"}
    assert result.to_flags() == []


def test_sentiment_negator_flips_next_token():
    analyzer = SentimentAnalyzer()

    result = analyzer.analyze("not happy")
    assert result.score == -3
    assert result.comparative == -1.5
    assert result.negative == ["happy"]
    assert result.to_flags()[0].type == "negative_sentiment"

    result = analyzer.analyze("I don't like it")
    assert result.score == -2
    assert result.comparative == -0.5

    # Only the token directly after the negator is flipped.
    assert analyzer.analyze("not at all happy").score == 3


def test_sentiment_tokens_and_comparative():
    result = SentimentAnalyzer().analyze("Hello, world!")
    assert result.tokens == ["hello", "world"]
    assert result.comparative == result.score / 2


def test_sentiment_no_tokens():
    result = SentimentAnalyzer().analyze("!!! ...")
    assert result.tokens == []
    assert result.comparative == 0


def test_sentiment_category_helpers():
    analyzer = SentimentAnalyzer()
    assert analyzer.get_sentiment_category(3) == "very_positive"
    assert analyzer.get_sentiment_category(1) == "positive"
    assert analyzer.get_sentiment_category(0) == "neutral"
    assert analyzer.get_sentiment_category(-1) == "negative"
    assert analyzer.get_sentiment_category(-2) == "very_negative"
    assert analyzer.is_overly_negative(-4)
    assert analyzer.is_overly_positive(6)
    assert analyzer.get_sentiment_confidence(-20) == 1.0
    assert analyzer.get_sentiment_confidence(5) == 0.5


# --- Toxicity ---


def test_toxicity_phrase_below_threshold():
    result = ToxicityDetector().check("Oh shut up, that's funny")
    assert result.toxicity_score == 0.5
    assert not result.is_toxic
    assert result.to_flags() == []


def test_toxicity_insult_flags_high():
    result = ToxicityDetector().check("Honestly, you are an idiot")
    assert result.is_toxic
    assert result.categories["general_toxicity"] == 0.7

    flag = result.to_flags()[0]
    assert flag.type == "toxicity"
    assert flag.severity == Severity.HIGH
    assert flag.confidence == 0.7


def test_toxicity_categories():
    detector = ToxicityDetector()
    assert detector.check("I will kill the bugs").categories["violence"] == 0.9
    assert detector.check("All cats are lazy").categories["hate_speech"] == 0.8
    assert detector.check("No explicit images please").categories["sexual_content"] == 0.7


def test_toxicity_score_is_max_across_categories():
    result = ToxicityDetector().check("Shut up, I will kill you")
    assert result.categories["general_toxicity"] == 0.5
    assert result.categories["violence"] == 0.9
    assert result.toxicity_score == 0.9


def test_toxicity_shouting_and_punctuation_floors():
    detector = ToxicityDetector()
    assert detector.check("THIS IS SO LOUD").categories["general_toxicity"] == 0.3
    assert detector.check("what? really? why? how? when? who?").categories["general_toxicity"] == 0.2


def test_toxicity_disabled_categories_score_zero():
    detector = ToxicityDetector()
    result = detector.check("All cats are lazy and I will kill you", categories={VIOLENCE})
    assert result.categories["hate_speech"] == 0
    assert result.categories["violence"] == 0.9

    result = detector.check("All cats are lazy", categories=set())
    assert not result.is_toxic
    assert result.categories[HATE_SPEECH] == 0


def test_toxicity_custom_patterns():
    detector = ToxicityDetector()
    detector.add_toxic_pattern("You Clown", 0.75)
    assert detector.check("you clown").toxicity_score == 0.75


# --- Spam ---


def test_spam_promotional_shouting():
    result = SpamDetector().check("BUY NOW!!! LIMITED TIME OFFER!!! FREE MONEY!!!")
    assert result.is_spam
    assert result.spam_score > 0.6
    assert result.spam_score <= 1.0
    assert 'Spam phrase: "free money"' in result.spam_indicators
    assert "Excessive punctuation" in result.spam_indicators

    flag = result.to_flags()[0]
    assert flag.type == "spam"
    assert flag.severity == Severity.MEDIUM
    assert flag.confidence == result.spam_score


def test_spam_ordinary_text():
    result = SpamDetector().check("Check out my new blog post about gardening")
    assert not result.is_spam
    assert result.spam_score == 0
    assert result.to_flags() == []


def test_spam_many_urls_and_clean_content():
    text = "see http://a.com and http://b.com and http://c.com!!!"
    detector = SpamDetector()
    assert detector.count_urls(text) == 3

    result = detector.check(text)
    assert result.is_spam
    assert "Multiple URLs detected: 3" in result.spam_indicators
    assert result.clean_content == "see [URL] and [URL] and [URL]"


def test_spam_score_is_additive():
    # "act now" phrase (0.7) alone is not spam, but the suspicious pattern adds 0.6.
    result = SpamDetector().check("please act now")
    assert result.spam_score == 1.0


def test_spam_repeated_words():
    result = SpamDetector().check("great great great great deal")
    assert result.spam_score == 0.2
    assert 'Repetitive word: "great" (4 times)' in result.spam_indicators
    assert not result.is_spam


def test_spam_clean_content_collapses_punctuation():
    assert SpamDetector().clean_content("  Wow!!! Really??  ") == "Wow! Really?"


# --- Personal info ---


def test_personal_info_email_and_phone():
    result = PersonalInfoDetector().check("My email is test@example.com and phone is 555-123-4567")
    assert result.has_personal_info
    assert result.confidence >= 0.9
    assert "email" in result.info_types
    assert "phone" in result.info_types
    assert "test@example.com" in result.detected_info
    assert "555-123-4567" in result.detected_info

    flag = result.to_flags()[0]
    assert flag.type == "personal_info"
    assert flag.severity == Severity.HIGH


def test_personal_info_ssn_highest_confidence():
    result = PersonalInfoDetector().check("My SSN is 123-45-6789")
    assert result.confidence == 0.95
    assert result.info_types == ["ssn", "personal_keyword"]


def test_personal_info_credit_card():
    result = PersonalInfoDetector().check("card 4111 1111 1111 1111 expires soon")
    assert "credit_card" in result.info_types
    assert result.confidence == 0.9


def test_personal_info_single_name_ignored():
    result = PersonalInfoDetector().check("Great talk by Jane Doe today")
    assert not result.has_personal_info
    assert result.to_flags() == []


def test_personal_info_multiple_names_detected():
    result = PersonalInfoDetector().check("Thanks to John Smith and Jane Doe")
    assert result.has_personal_info
    assert result.info_types == ["name"]
    assert result.confidence == 0.6


def test_personal_info_keyword_alone_does_not_flag():
    result = PersonalInfoDetector().check("never share your password with anyone")
    assert not result.has_personal_info
    assert result.info_types == ["personal_keyword"]
    assert result.confidence == 0.5


def test_personal_info_deduplicates():
    result = PersonalInfoDetector().check("a@b.com or a@b.com")
    assert result.detected_info == ["a@b.com"]
    assert result.info_types == ["email"]
