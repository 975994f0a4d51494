import pytest

from vectorpad.negativespace import GapClass, Result, analyze


def gap_classes(result):
    return [g.gap_class for g in result.gaps]


def test_clean_directive():
    text = (
        "Update all READMEs to standardize badge format. Preserve philosophy sections, "
        "keep existing voice. Review each repo individually before applying. "
        "Expected result: badges are consistent, content unchanged. "
        "Revert with git if anything looks wrong. Skip archived repos."
    )
    result = analyze(text)
    assert result.clean(), [(g.gap_class, g.signal) for g in result.gaps]


def test_readme_massacre():
    result = analyze("clean up READMEs for alignment")
    assert not result.clean()
    classes = gap_classes(result)
    for expected in (GapClass.PRESERVATION, GapClass.SUCCESS, GapClass.IDENTITY):
        assert expected in classes


def test_readme_massacre_signals():
    result = analyze("clean up READMEs for alignment")
    by_class = {g.gap_class: g.signal for g in result.gaps}
    assert by_class[GapClass.PRESERVATION] == "clean"
    assert by_class[GapClass.IDENTITY] == "clean up"


def test_preservation_gap():
    without = analyze("delete old config files from all repos")
    assert GapClass.PRESERVATION in [g.gap_class for g in without.gaps]
    with_keep = analyze("delete old config files from all repos but keep .env.example")
    assert GapClass.PRESERVATION not in [g.gap_class for g in with_keep.gaps]


def test_success_criteria_gap():
    without = analyze("refactor the authentication module")
    assert GapClass.SUCCESS in [g.gap_class for g in without.gaps]
    with_criteria = analyze(
        "refactor the authentication module. Expected result: all tests pass "
        "and coverage stays above 85%"
    )
    assert GapClass.SUCCESS not in [g.gap_class for g in with_criteria.gaps]


def test_review_process_gap():
    without = analyze("update all repos to use new CI template")
    assert GapClass.REVIEW in [g.gap_class for g in without.gaps]
    with_review = analyze(
        "update all repos to use new CI template. Review each repo before applying"
    )
    assert GapClass.REVIEW not in [g.gap_class for g in with_review.gaps]


def test_rollback_gap():
    without = analyze("remove deprecated APIs from all services")
    assert GapClass.ROLLBACK in [g.gap_class for g in without.gaps]
    with_backup = analyze(
        "remove deprecated APIs from all services. Backup each service before changes"
    )
    assert GapClass.ROLLBACK not in [g.gap_class for g in with_backup.gaps]


def test_scope_boundary_gap():
    without = analyze("update every file in the project")
    assert GapClass.SCOPE_BOUNDARY in [g.gap_class for g in without.gaps]
    with_exclusion = analyze("update every file in the project except vendor/")
    assert GapClass.SCOPE_BOUNDARY not in [g.gap_class for g in with_exclusion.gaps]


def test_identity_gap():
    without = analyze("rewrite the project documentation")
    assert GapClass.IDENTITY in [g.gap_class for g in without.gaps]
    with_voice = analyze("rewrite the project documentation. Keep the existing voice and tone")
    assert GapClass.IDENTITY not in [g.gap_class for g in with_voice.gaps]


def test_no_action_no_gaps():
    result = analyze("the system uses JWT tokens for authentication")
    assert result.clean(), gap_classes(result)
    assert result.action_signals == 0


def test_action_signal_count():
    result = analyze("clean up and refactor the code, then update the docs")
    assert result.action_signals >= 3


def test_scope_signal_count():
    result = analyze("apply this across all repos and all files")
    assert result.scope_signals >= 2


def test_deterministic():
    text = "clean up READMEs for alignment"
    first = analyze(text)
    second = analyze(text)
    first_classes = [g.gap_class for g in first.gaps]
    second_classes = [g.gap_class for g in second.gaps]
    assert first_classes == [GapClass.PRESERVATION, GapClass.SUCCESS, GapClass.IDENTITY]
    assert second_classes == first_classes


def test_gap_order_follows_checks():
    result = analyze("delete old config files from all repos")
    classes = gap_classes(result)
    assert classes == sorted(classes, key=list(GapClass).index)


def test_case_insensitive():
    assert gap_classes(analyze("DELETE EVERY FILE")) == gap_classes(analyze("delete every file"))


def test_empty_result_is_clean():
    assert Result().clean()
    assert analyze("").clean()


@pytest.mark.parametrize("gap_class", list(GapClass))
def test_gap_class_value_round_trip(gap_class):
    assert GapClass(gap_class.value) is gap_class