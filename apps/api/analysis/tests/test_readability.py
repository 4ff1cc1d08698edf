import pytest

from analysis.readability import (
    ReadabilityAnalyzer,
    analyze_script,
    count_sentences,
    count_syllables,
    find_heading_markers,
    flesch_reading_ease,
    format_grade,
    score_to_grade_level,
    split_components,
    tokenize,
)


# Grade 1: "Wow!" (score clamps to 100)
# Grade 2: 5 words, 7 syllables, one sentence -> 83
# Grade 6: 5 words, 8 syllables, one sentence -> 66
# Grade 8: 4 words, 7 syllables, one sentence -> 55
GRADE_1 = "Wow!"
GRADE_2 = "Water happy dog cat sun."
GRADE_6 = "Water happy paper dog cat."
GRADE_8 = "Water happy paper dog."


@pytest.fixture
def analyzer():
    return ReadabilityAnalyzer()


def test_plain_text_falls_back_to_introduction(analyzer):
    result = analyzer.analyze("just plain text, no markers")

    assert len(result.components) == 1
    assert result.components[0].heading == "Introduction"
    assert result.components[0].content == "just plain text, no markers"
    assert result.components[0].word_count == 5


def test_headings_split_script_in_order(analyzer):
    result = analyzer.analyze("**Hook:** Hi there **Bridge:** Next part")

    assert [(c.heading, c.content) for c in result.components] == [
        ("Hook", "Hi there"),
        ("Bridge", "Next part"),
    ]


def test_empty_script_scores_lowest_band(analyzer):
    result = analyzer.analyze("")

    assert len(result.components) == 1
    component = result.components[0]
    assert component.heading == "Introduction"
    assert component.word_count == 0
    assert component.readability_score == 0
    assert component.grade_level == 12
    assert result.average_grade_level == "12.0"
    assert result.passes_third_grade_test is False


def test_whitespace_only_script(analyzer):
    result = analyzer.analyze("   \n\t ")

    assert result.components[0].content == ""
    assert result.components[0].word_count == 0
    assert result.components[0].grade_level == 12


def test_punctuation_only_script(analyzer):
    result = analyzer.analyze("?!... ---")

    assert result.components[0].word_count == 0
    assert result.components[0].readability_score == 0


def test_end_to_end_four_components():
    script = "**Hook:** Wow! **Bridge:** So then. **Nugget:** Do this now. **WTA:** Try it."

    result = analyze_script(script)

    assert [c.heading for c in result.components] == ["Hook", "Bridge", "Nugget", "WTA"]
    assert [c.word_count for c in result.components] == [1, 2, 3, 2]
    assert all(c.readability_score == 100 for c in result.components)
    assert all(c.grade_level == 1 for c in result.components)
    assert result.average_grade_level == "1.0"
    assert result.passes_third_grade_test is True


def test_analysis_is_deterministic(analyzer):
    script = "**Hook:** Stop scrolling! **Bridge:** Here is the thing about sleep."

    assert analyzer.analyze(script) == analyzer.analyze(script)


def test_average_of_exactly_three_and_a_half_passes():
    result = analyze_script(f"**Hook:** {GRADE_1} **Bridge:** {GRADE_6}")

    assert [c.grade_level for c in result.components] == [1, 6]
    assert result.average_grade_level == "3.5"
    assert result.passes_third_grade_test is True


def test_average_of_three_point_six_fails():
    script = (
        f"**A:** {GRADE_1} **B:** {GRADE_1} **C:** {GRADE_2} "
        f"**D:** {GRADE_6} **E:** {GRADE_8}"
    )

    result = analyze_script(script)

    assert [c.grade_level for c in result.components] == [1, 1, 2, 6, 8]
    assert result.average_grade_level == "3.6"
    assert result.passes_third_grade_test is False


def test_score_is_clamped_at_both_ends():
    easy = analyze_script("Wow!").components[0]
    hard = analyze_script("Internationalization.").components[0]

    assert easy.readability_score == 100
    assert hard.readability_score == 0
    assert hard.grade_level == 12


def test_simpler_component_never_scores_lower():
    result = analyze_script("**A:** Go now. **B:** Beautiful information everywhere.")
    simple, complex_ = result.components

    assert simple.readability_score >= complex_.readability_score
    assert simple.grade_level <= complex_.grade_level


def test_text_before_first_heading_is_dropped():
    components = split_components("Preamble words **Hook:** Hi")

    assert [(c.heading, c.content) for c in components] == [("Hook", "Hi")]


def test_heading_without_content_keeps_empty_component():
    result = analyze_script("**Hook:**")

    assert result.components[0].heading == "Hook"
    assert result.components[0].content == ""
    assert result.components[0].grade_level == 12


def test_crlf_line_endings_are_normalized():
    components = split_components("**Hook:**\r\nHi\r\n**Bridge:**\r\nThere")

    assert [(c.heading, c.content) for c in components] == [("Hook", "Hi"), ("Bridge", "There")]


def test_heading_markers_grammar():
    assert find_heading_markers("***Hook:** x") == [(1, 10, "Hook")]
    assert find_heading_markers("**Not a heading** text") == []
    assert find_heading_markers("**:**") == []
    assert find_heading_markers("**Time: 10:**") == [(0, 13, "Time: 10")]
    assert find_heading_markers("** Spaced :**")[0][2] == "Spaced"


def test_unclosed_marker_is_plain_text():
    components = split_components("**Hook: still going")

    assert components[0].heading == "Introduction"
    assert components[0].content == "**Hook: still going"


def test_tokenize_strips_punctuation_and_lowercases():
    assert tokenize("Hello, World! It's 2024.") == ["hello", "world", "it", "s", "2024"]
    assert tokenize("   ") == []


def test_tokenize_keeps_only_ascii_letters_and_digits():
    assert tokenize("naïve café") == ["na", "ve", "caf"]
    assert tokenize("snake_case") == ["snake", "case"]
    assert tokenize("日本語") == []


def test_non_ascii_words_are_split_when_counting():
    assert analyze_script("naïve café").components[0].word_count == 3

    cjk_only = analyze_script("こんにちは。").components[0]
    assert cjk_only.word_count == 0
    assert cjk_only.readability_score == 0


@pytest.mark.parametrize(
    "word,expected",
    [
        ("cat", 1),
        ("cake", 1),
        ("the", 1),
        ("queue", 1),
        ("rhythm", 1),
        ("bcd", 1),
        ("water", 2),
        ("happy", 2),
        ("beautiful", 3),
    ],
)
def test_count_syllables(word, expected):
    assert count_syllables(word) == expected


def test_count_sentences_ignores_blank_fragments():
    assert count_sentences("One. Two!! Three?!") == 3
    assert count_sentences("...") == 0
    assert count_sentences("no terminator") == 1


def test_flesch_reading_ease_zero_without_words():
    assert flesch_reading_ease("", []) == 0
    assert flesch_reading_ease("...", []) == 0


@pytest.mark.parametrize(
    "score,grade",
    [(100, 1), (90, 1), (89, 2), (80, 2), (70, 3), (69, 6), (60, 6), (50, 8), (30, 10), (29, 12), (0, 12)],
)
def test_score_to_grade_level_bands(score, grade):
    assert score_to_grade_level(score) == grade


def test_format_grade_rounds_half_up():
    assert format_grade(2.25) == "2.3"
    assert format_grade(3.5) == "3.5"
    assert format_grade(0.0) == "0.0"


def test_serializes_with_camel_case_keys():
    payload = analyze_script("**Hook:** Wow!").model_dump(by_alias=True)

    assert set(payload) == {"averageGradeLevel", "passesThirdGradeTest", "components"}
    assert set(payload["components"][0]) == {
        "heading",
        "content",
        "wordCount",
        "readabilityScore",
        "gradeLevel",
    }
