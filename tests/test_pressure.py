import pytest

from vectorpad.pressure import Level, contains_word, score
from vectorpad.sentence import LockPolicy, Sentence, Tag


def test_locked_constraint_is_low():
    sentences = [Sentence("You must preserve all philosophy sections", Tag.CONSTRAINT, LockPolicy.HARD)]
    scores = score(sentences, None)
    assert len(scores) == 1
    assert scores[0].level == Level.LOW
    assert scores[0].score == 10
    assert scores[0].signals == ["short"]


def test_unlocked_explanation_is_medium():
    sentences = [Sentence("This is just some context", Tag.EXPLANATION, LockPolicy.NONE)]
    scores = score(sentences, None)
    assert scores[0].level == Level.MEDIUM
    assert scores[0].score == 45


def test_vague_verb_is_high():
    sentences = [Sentence("clean up the code", Tag.EXPLANATION, LockPolicy.NONE)]
    scores = score(sentences, ["clean"])
    assert scores[0].level == Level.HIGH
    assert "vague: clean" in scores[0].signals


def test_speculation_is_high():
    sentences = [Sentence("Maybe we should consider alternative approaches to this problem",
                          Tag.SPECULATION, LockPolicy.NONE)]
    scores = score(sentences, None)
    assert scores[0].level == Level.HIGH
    assert scores[0].signals == ["unlocked", "speculation"]


def test_multiple_sentences_ordering():
    sentences = [
        Sentence("You must preserve the README voice", Tag.CONSTRAINT, LockPolicy.HARD),
        Sentence("clean up", Tag.EXPLANATION, LockPolicy.NONE),
    ]
    scores = score(sentences, ["clean"])
    assert len(scores) == 2
    assert scores[0].level < scores[1].level
    assert [s.index for s in scores] == [0, 1]


def test_empty_input():
    assert score(None, None) == []


def test_short_sentence_penalty():
    scores = score([Sentence("fix it", Tag.EXPLANATION, LockPolicy.NONE)], None)
    assert "very short" in scores[0].signals


def test_score_capped_at_100():
    scores = score([Sentence("maybe clean", Tag.SPECULATION, LockPolicy.NONE)], ["clean"])
    assert scores[0].score == 100
    assert scores[0].level == Level.HIGH


def test_vague_verb_counted_once():
    scores = score([Sentence("clean and purge the old stuff now", Tag.DECISION, LockPolicy.SOFT)],
                   ["clean", "purge"])
    vague = [s for s in scores[0].signals if s.startswith("vague: ")]
    assert len(vague) == 1
    assert scores[0].score == 15 + 30


@pytest.mark.parametrize(
    ("text", "word", "expected"),
    [
        ("clean up the code", "clean", True),
        ("cleanup the code", "clean", False),
        ("the code is clean", "clean", True),
        ("CLEAN everything", "clean", True),
        ("unclean code", "clean", False),
    ],
)
def test_contains_word(text, word, expected):
    assert contains_word(text, word) is expected


def test_contains_word_finds_later_bounded_occurrence():
    assert contains_word("cleanup then clean", "clean") is True