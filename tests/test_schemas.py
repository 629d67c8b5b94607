import json

import pytest

from talentinsight.errors import AnalysisParseError, EmptyResponseError
from talentinsight.interview.models import (
    DiscType, Defensiveness, EyeContact, RiskLevel, Speaker,
)
from talentinsight.interview.schemas import (
    analysis_response_schema, load_json_text, parse_analysis_result, parse_follow_up,
    parse_generated_questions,
)
from talentinsight.interview.testing import (
    sample_analysis_data, sample_analysis_json, sample_follow_up_json, sample_questions_json,
)


def test_parse_analysis_result_maps_every_field():
    result = parse_analysis_result(sample_analysis_json())

    assert result.match_score == 85
    assert result.risk_level == RiskLevel.LOW
    assert result.key_skills == ["Python", "System Design", "Komunikasi"]
    assert [t.speaker for t in result.transcription] == [Speaker.INTERVIEWER, Speaker.CANDIDATE]
    assert result.personality.problem_solving == 8
    assert result.disc_profile.dominant_type == DiscType.C
    assert result.disc_profile.scores()[DiscType.C] == 80
    assert result.emotion_analysis.eye_contact == EyeContact.GOOD
    assert result.emotion_analysis.defensiveness == Defensiveness.NONE
    assert result.suggested_follow_up_questions


def test_disc_scores_need_not_sum_to_100():
    data = sample_analysis_data()
    data["discProfile"].update(dScore=90, iScore=90, sScore=90, cScore=90, dominantType="D")
    result = parse_analysis_result(json.dumps(data))
    assert sum(result.disc_profile.scores().values()) == 360


def test_empty_response_is_an_error():
    with pytest.raises(EmptyResponseError):
        parse_analysis_result("")
    with pytest.raises(EmptyResponseError):
        parse_analysis_result("   \n")


def test_non_json_response_is_a_parse_error():
    with pytest.raises(AnalysisParseError):
        parse_analysis_result("Maaf, saya tidak bisa menganalisis video ini.")


def test_missing_field_is_named_in_error():
    data = sample_analysis_data()
    del data["matchScore"]
    with pytest.raises(AnalysisParseError) as excinfo:
        parse_analysis_result(json.dumps(data))
    assert "matchScore" in excinfo.value.message


def test_out_of_vocabulary_enum_is_rejected():
    with pytest.raises(AnalysisParseError):
        parse_analysis_result(sample_analysis_json(riskLevel="Critical"))


def test_localised_enum_is_rejected():
    data = sample_analysis_data()
    data["emotionAnalysis"]["eyeContact"] = "Baik"
    with pytest.raises(AnalysisParseError):
        parse_analysis_result(json.dumps(data))


@pytest.mark.parametrize("score", ["85", True, None])
def test_mistyped_match_score_is_rejected(score):
    with pytest.raises(AnalysisParseError) as excinfo:
        parse_analysis_result(sample_analysis_json(matchScore=score))
    assert "matchScore" in excinfo.value.message


def test_string_trait_score_is_rejected():
    data = sample_analysis_data()
    data["personality"]["leadership"] = "7"
    with pytest.raises(AnalysisParseError):
        parse_analysis_result(json.dumps(data))


def test_integer_scores_are_accepted_as_numbers():
    result = parse_analysis_result(sample_analysis_json(matchScore=72))
    assert result.match_score == 72


def test_non_string_question_is_rejected():
    with pytest.raises(AnalysisParseError):
        parse_generated_questions('[{"question": 42, "intent": "i"}]')


def test_non_string_follow_up_is_rejected():
    with pytest.raises(AnalysisParseError):
        parse_follow_up('{"followUpQuestion": ["Kenapa?"], "explanation": "e"}')


def test_fenced_json_is_recovered():
    text = "```json\n" + sample_analysis_json() + "\n```"
    assert parse_analysis_result(text).match_score == 85


def test_load_json_text_array_in_prose():
    assert load_json_text('Berikut daftarnya: [{"a": 1}]') == [{"a": 1}]


def test_parse_generated_questions_preserves_order():
    questions = parse_generated_questions(sample_questions_json(3))
    assert [q.question.split(":")[0] for q in questions] == ["Pertanyaan 1", "Pertanyaan 2", "Pertanyaan 3"]
    assert questions[0].intent == "Menguji kompetensi 1"


def test_parse_generated_questions_requires_array():
    with pytest.raises(AnalysisParseError):
        parse_generated_questions('{"question": "q", "intent": "i"}')


def test_parse_follow_up():
    suggestion = parse_follow_up(sample_follow_up_json())
    assert suggestion.follow_up_question.startswith("Apa hasil terukur")
    assert suggestion.explanation


def test_parse_follow_up_missing_explanation():
    with pytest.raises(AnalysisParseError):
        parse_follow_up('{"followUpQuestion": "Kenapa?"}')


def test_declared_schema_requires_every_top_level_field():
    schema = analysis_response_schema("Bahasa Indonesia")
    assert set(schema["required"]) == set(schema["properties"])
    assert schema["properties"]["discProfile"]["properties"]["dominantType"]["enum"] == ["D", "I", "S", "C"]
    assert schema["properties"]["emotionAnalysis"]["properties"]["eyeContact"]["enum"] == [
        "Good", "Average", "Poor", "Not Visible",
    ]
    assert "Bahasa Indonesia" in schema["properties"]["summary"]["description"]
