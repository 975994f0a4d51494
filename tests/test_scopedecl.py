from vectorpad.scopedecl import Declaration, cross_reference, parse


def _types(result):
    return [m.type for m in result.mismatches]


def test_parse_empty():
    assert parse("").empty() is True


def test_parse_full_declaration():
    block = "scope: 18 repos\noperation: cleanup\ntargets: README.md, CONTRIBUTING.md\nfiles: 36"
    decl = parse(block)
    assert decl.repos == 18
    assert decl.files == 36
    assert decl.operation == "cleanup"
    assert decl.targets == ["README.md", "CONTRIBUTING.md"]


def test_parse_ignores_lines_without_colon_and_lowercases_keys():
    decl = parse("no colon here\nSCOPE: about 4 repos\n: orphan value\nunknown: 7")
    assert decl.repos == 4
    assert decl.files == 0
    assert decl.targets == []
    assert decl.operation == ""


def test_parse_scope_without_number_is_zero():
    decl = parse("scope: many repos\ntargets: , ,a.md")
    assert decl.repos == 0
    assert decl.targets == ["a.md"]


def test_cross_reference_clean():
    decl = Declaration(repos=18, operation="cleanup")
    text = ("Clean up badge formatting in each repo. Preserve philosophy sections and "
            "keep existing voice. Review each repo individually.")
    result = cross_reference(decl, text)
    assert result.mismatches == []
    assert result.clean() is True


def test_cross_reference_scope_vs_constraints():
    decl = Declaration(repos=18, operation="cleanup")
    result = cross_reference(decl, "clean up READMEs for alignment")
    assert result.clean() is False
    types = _types(result)
    assert "scope_vs_constraints" in types
    assert "operation_vs_preservation" in types
    first = result.mismatches[0]
    assert first.declared == "18 repos"
    assert first.detected == "0 per-repo constraints"


def test_cross_reference_operation_vs_verbs():
    decl = Declaration(operation="cleanup")
    result = cross_reference(decl, "rewrite all documentation from scratch")
    assert "operation_vs_verbs" in _types(result)
    mismatch = next(m for m in result.mismatches if m.type == "operation_vs_verbs")
    assert mismatch.detected == "text uses: rewrite"
    assert mismatch.declared == "operation: cleanup"


def test_cross_reference_target_not_mentioned():
    decl = Declaration(targets=["README.md", "CHANGELOG.md"])
    result = cross_reference(decl, "update the README to include badges")
    declared = [m.declared for m in result.mismatches if m.type == "target_not_mentioned"]
    assert "target: CHANGELOG.md" in declared


def test_cross_reference_empty_declaration():
    result = cross_reference(Declaration(), "do anything")
    assert result.clean() is True


def test_cross_reference_operation_matches_synonym():
    decl = Declaration(operation="cleanup")
    result = cross_reference(decl, "clean the badge formatting across repos. Preserve voice.")
    assert "operation_vs_verbs" not in _types(result)


def test_cross_reference_migration_synonym():
    decl = Declaration(operation="migration")
    result = cross_reference(decl, "migrate the config. keep defaults.")
    assert _types(result) == []