from decimal import Decimal

from controller.grading.text_review import analyze_text, check_grammar, check_spelling


def test_article_before_vowel_is_flagged():
    errors = check_grammar("I ate a apple and a banana")
    assert len(errors) == 1
    assert errors[0].type == "article"
    assert errors[0].offset == 2
    assert errors[0].suggestion == "an"


def test_article_check_ignores_punctuation_and_case():
    errors = check_grammar("A, Orange?")
    assert [e.suggestion for e in errors] == ["an"]


def test_common_misspellings_report_character_offsets():
    errors = check_spelling("I recieve teh mail")
    assert [(e.offset, e.length, e.suggestion) for e in errors] == [
        (2, 7, "receive"),
        (10, 3, "the"),
    ]
    assert errors[0].message == "Spelling error: 'recieve'"


def test_blank_text_has_no_issues():
    assert check_grammar("   ") == []
    assert check_spelling(None) == []
    analysis = analyze_text("")
    assert analysis.word_count == 0
    assert analysis.quality_score == Decimal("1.00")


def test_analyze_text_quality_score():
    clean = analyze_text("This sentence is fine")
    assert clean.quality_score == Decimal("1.00")
    assert clean.word_count == 4

    messy = analyze_text("I recieve a apple")
    assert messy.grammar_error_count == 1
    assert messy.spelling_error_count == 1
    assert messy.quality_score == Decimal("0.00")

    mild = analyze_text("teh weather is really nice today here")
    assert mild.quality_score == Decimal("0.71")
