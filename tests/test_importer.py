"""Tests for import validation, preview and commit."""

import pytest

from kids_english import DocumentError
from kids_english.importer import ValidationFailure, check_record, parse_document
from kids_english.models import DialogueQuestion, SpellingQuestion
from kids_english.samples import EXAMPLE_KINDS, example_document


def _rule(record):
    outcome = check_record(record)
    return outcome.rule if isinstance(outcome, ValidationFailure) else None


SENTENCE = {"type": "sentence-building", "sentence": "Hi", "translation": "嗨"}
MATCHING = {
    "type": "matching", "sentence": "Animals", "translation": "动物",
    "words": ["dog", "cat"], "wordTranslations": ["狗", "猫"],
}
SPELLING = {
    "type": "spelling", "sentence": "apple", "translation": "苹果", "word": "apple",
    "meaning": "苹果", "distractors": ["香蕉", "橙子", "葡萄"],
}
BLANK = {"type": "fill-in-blank", "sentence": "I ___ to school", "translation": "t", "blanks": ["go"]}
DIALOGUE = {"type": "dialogue", "question": "How are you", "answer": "Fine", "translation": "t"}


# ── check_record: the rule chain ────────────────────────────


@pytest.mark.parametrize("record", [SENTENCE, MATCHING, SPELLING, BLANK, DIALOGUE])
def test_valid_records(record):
    assert _rule(record) is None


@pytest.mark.parametrize("record", [
    "not an object",
    {"sentence": "Hi", "translation": "嗨"},
    {"type": "sentence-building", "sentence": "Hi"},
    {"type": "sentence-building", "sentence": "Hi", "translation": ""},
    {"type": "", "sentence": "Hi", "translation": "嗨"},
])
def test_rule_1_type_and_translation(record):
    assert _rule(record) == 1


def test_rule_2_sentence_required_except_dialogue():
    assert _rule({"type": "matching", "translation": "t"}) == 2
    assert _rule(DIALOGUE) is None


def test_rule_3_known_type():
    assert _rule({"type": "essay", "sentence": "x", "translation": "y"}) == 3


def test_rule_order_first_failure_wins():
    """An unknown type without a sentence fails on the sentence rule first."""
    assert _rule({"type": "essay", "translation": "y"}) == 2


def test_rule_4_matching_lengths_differ():
    assert _rule({**MATCHING, "wordTranslations": ["狗"]}) == 4


def test_rule_4_matching_needs_lists():
    assert _rule({**MATCHING, "words": "dog,cat"}) == 4
    assert _rule({k: v for k, v in MATCHING.items() if k != "wordTranslations"}) == 4


def test_rule_4_matching_empty():
    assert _rule({**MATCHING, "words": [], "wordTranslations": []}) == 4


def test_rule_5_spelling():
    assert _rule({**SPELLING, "distractors": ["a", "b"]}) == 5
    assert _rule({**SPELLING, "distractors": ["a", "b", "c", "d"]}) == 5
    assert _rule({**SPELLING, "word": ""}) == 5
    assert _rule({k: v for k, v in SPELLING.items() if k != "meaning"}) == 5


def test_rule_6_blank_count_must_match():
    assert _rule({**BLANK, "sentence": "I ___ to ___ every day", "blanks": ["go"]}) == 6
    assert _rule({**BLANK, "sentence": "I ___ to school", "blanks": ["go"]}) is None


def test_rule_6_blanks_required():
    assert _rule({**BLANK, "blanks": []}) == 6
    assert _rule({**BLANK, "blanks": "go"}) == 6


def test_rule_7_dialogue():
    assert _rule({**DIALOGUE, "answer": ""}) == 7
    assert _rule({k: v for k, v in DIALOGUE.items() if k != "question"}) == 7


def test_failure_carries_index_and_reason():
    outcome = check_record({**MATCHING, "wordTranslations": ["狗"]}, index=4)
    assert outcome.index == 4
    assert "2 words" in outcome.reason


# ── analyze ─────────────────────────────────────────────────


def test_analyze_counts(bank):
    preview = bank.analyze_import([SENTENCE, {"type": "essay", "sentence": "x", "translation": "y"}, BLANK])
    assert preview.total == 3
    assert preview.valid == 2
    assert preview.invalid == 1
    assert preview.valid_indices == [0, 2]
    assert preview.failures[0].index == 1


def test_analyze_prefix_paths(bank):
    bank.folders.resolve_or_create("A")
    preview = bank.analyze_import([{**SENTENCE, "folderName": "A/B/C"}])
    assert preview.existing_folders == ["A"]
    assert preview.new_folders == ["A/B", "A/B/C"]


def test_analyze_deduplicates_and_sorts(bank):
    records = [
        {**SENTENCE, "folderName": "Zoo/Cats"},
        {**SENTENCE, "folderName": " Zoo / Cats "},
        {**SENTENCE, "folderName": "Apple"},
    ]
    preview = bank.analyze_import(records)
    assert preview.new_folders == ["Apple", "Zoo", "Zoo/Cats"]


def test_analyze_ignores_folders_of_invalid_records(bank):
    preview = bank.analyze_import([{"type": "essay", "sentence": "x", "translation": "y", "folderName": "X"}])
    assert preview.new_folders == []


def test_analyze_does_not_mutate(bank, store):
    bank.analyze_import([{**SENTENCE, "folderName": "A/B"}])
    assert store.raw("folders") is None
    assert store.raw("questions") is None


def test_preview_summary(bank):
    preview = bank.analyze_import([{**SENTENCE, "folderName": "A"}, {"type": "x"}])
    text = preview.summary()
    assert "1 valid, 1 invalid" in text
    assert "New folders: A" in text
    assert "Record 2:" in text


# ── commit ──────────────────────────────────────────────────


def test_end_to_end_empty_store(bank):
    result = bank.commit_import([
        {"type": "sentence-building", "sentence": "Hi", "translation": "嗨", "folderName": "A/B"},
    ])
    assert result.folders_created == 2
    assert len(result.added) == 1
    b = bank.folders.find_path("A/B")
    assert result.added[0].folder_id == b.id
    assert len(bank.folders.list_folders()) == 2


def test_preview_for_end_to_end_case(bank):
    preview = bank.analyze_import([{**SENTENCE, "folderName": "A/B"}])
    assert preview.new_folders == ["A", "A/B"]
    assert preview.existing_folders == []


def test_commit_matches_preview(bank):
    bank.folders.resolve_or_create("Existing")
    records = [
        {**SENTENCE, "folderName": "Existing/New"},
        {**MATCHING, "wordTranslations": ["狗"], "folderName": "Never"},
        {**SPELLING, "folderName": "Spelling/Fruit"},
        "junk",
        {**BLANK, "sentence": "I ___ to ___", "folderName": "Never2"},
        {**DIALOGUE, "folderName": "Existing"},
        BLANK,
    ]
    preview = bank.analyze_import(records)
    result = bank.commit_import(records)

    assert result.added_indices == preview.valid_indices
    assert result.skipped == preview.invalid
    assert result.folders_created == len(preview.new_folders)

    after = set()
    for index in preview.valid_indices:
        name = records[index].get("folderName")
        if name:
            parts = [p.strip() for p in name.split("/") if p.strip()]
            for depth in range(1, len(parts) + 1):
                prefix = "/".join(parts[:depth])
                assert bank.folders.find_path(prefix) is not None
                after.add(prefix)
    assert after == set(preview.new_folders) | set(preview.existing_folders)


def test_commit_rejects_unequal_matching(bank):
    result = bank.commit_import([{**MATCHING, "wordTranslations": ["狗"]}])
    assert result.added == []
    assert result.skipped == 1
    assert bank.questions.list_questions() == []


def test_commit_dialogue_sentence_synthesised(bank):
    result = bank.commit_import([DIALOGUE])
    q = result.added[0]
    assert isinstance(q, DialogueQuestion)
    assert q.sentence == "How are you / Fine"
    assert q.show_question is True


def test_commit_dialogue_keeps_given_sentence(bank):
    result = bank.commit_import([{**DIALOGUE, "sentence": "Greeting", "showQuestion": False}])
    assert result.added[0].sentence == "Greeting"
    assert result.added[0].show_question is False


def test_commit_keeps_spelling_fields(bank):
    result = bank.commit_import([{**SPELLING, "phonetic": "/ˈæp.əl/"}])
    q = result.added[0]
    assert isinstance(q, SpellingQuestion)
    assert q.phonetic == "/ˈæp.əl/"
    assert q.distractors == ["香蕉", "橙子", "葡萄"]


def test_commit_legacy_folder_id(bank):
    result = bank.commit_import([{**SENTENCE, "folderId": "legacy-id"}])
    assert result.added[0].folder_id == "legacy-id"
    assert result.folders_created == 0


def test_commit_folder_name_wins_over_folder_id(bank):
    result = bank.commit_import([{**SENTENCE, "folderId": "legacy-id", "folderName": "A"}])
    assert result.added[0].folder_id == bank.folders.find_path("A").id


def test_commit_blank_folder_name_is_unfiled(bank):
    preview = bank.analyze_import([{**SENTENCE, "folderName": " / "}])
    result = bank.commit_import([{**SENTENCE, "folderName": " / "}])
    assert preview.valid == 1
    assert preview.new_folders == []
    assert result.added[0].folder_id is None
    assert result.folders_created == 0


def test_commit_reuses_folders_across_records(bank):
    result = bank.commit_import([
        {**SENTENCE, "folderName": "Greetings"},
        {**SENTENCE, "folderName": "Greetings"},
    ])
    assert result.folders_created == 1
    assert result.added[0].folder_id == result.added[1].folder_id


def test_commit_is_repeatable(bank):
    records = [{**SENTENCE, "folderName": "A/B"}]
    bank.commit_import(records)
    second = bank.commit_import(records)
    assert second.folders_created == 0
    assert len(bank.questions.list_questions()) == 2


def test_result_summary(bank):
    result = bank.commit_import([{**SENTENCE, "folderName": "A/B"}])
    assert result.summary() == "Imported 1 question(s), created 2 new folder(s)"


# ── parse_document / examples ───────────────────────────────


def test_parse_document():
    assert parse_document('[{"type": "dialogue"}]') == [{"type": "dialogue"}]


def test_parse_document_bytes():
    assert parse_document('[{"translation": "你好"}]'.encode("utf-8")) == [{"translation": "你好"}]


@pytest.mark.parametrize("text", ["{not json", '{"type": "dialogue"}', '"text"'])
def test_parse_document_errors(text):
    with pytest.raises(DocumentError):
        parse_document(text)


@pytest.mark.parametrize("kind", EXAMPLE_KINDS)
def test_example_documents_are_fully_valid(bank, kind):
    preview = bank.analyze_import(example_document(kind))
    assert preview.invalid == 0
    assert preview.valid == len(example_document(kind))


def test_example_document_is_a_copy():
    doc = example_document("sentence")
    doc[0]["sentence"] = "changed"
    assert example_document("sentence")[0]["sentence"] != "changed"


def test_unknown_example_kind():
    with pytest.raises(KeyError):
        example_document("essay")
