# vectorpad

Pre-flight checks for natural-language directives before you hand them to an
agent or a colleague. The package finds what a directive leaves unsaid, compares
it with a declared scope, scores each sentence for risk, estimates token cost,
talks to an Oracul deliberation service over HTTP, and keeps a local flight log
of what was launched.

## Install

```
pip install .
pip install ".[test]"   # with the test dependencies
```

Only the standard library is needed at run time.

## Missing constraints

`vectorpad.negativespace.analyze` looks for action verbs, broad scope and the
protection clauses that should go with them.

```python
from vectorpad.negativespace import analyze

result = analyze("clean up READMEs for alignment")
if not result.clean():
    for gap in result.gaps:
        print(gap.gap_class, gap.signal, gap.nudge_prompt)
print(result.action_signals, result.scope_signals)
```

The gap classes are preservation, success, review, rollback, scope_boundary
and identity (see `GapClass`).

## Declared scope against the text

```python
from vectorpad.scopedecl import parse, cross_reference

decl = parse("scope: 18 repos\noperation: cleanup\ntargets: README.md")
result = cross_reference(decl, "clean up READMEs for alignment")
for mismatch in result.mismatches:
    print(mismatch.type, mismatch.declared, mismatch.detected)
```

`parse` understands the keys `scope`, `files`, `operation` and `targets`
(comma separated). Mismatch types are `scope_vs_constraints`,
`operation_vs_preservation`, `operation_vs_verbs` and `target_not_mentioned`.
An empty declaration always gives a clean result.

## Sentence pressure and metrics

Both work on classified sentences: `vectorpad.sentence.Sentence`, each with a
`Tag` (DECISION, CONSTRAINT, TENTATIVE, SPECULATION, EXPLANATION, QUESTION)
and a `LockPolicy` (NONE, HARD, SOFT, MODAL_SPAN).

```python
from vectorpad.sentence import Sentence, Tag, LockPolicy
from vectorpad.pressure import score, contains_word
from vectorpad.metrics import compute, render_human, render_json, count_tokens

sentences = [
    Sentence("Do not remove the safety check.", Tag.CONSTRAINT, LockPolicy.HARD),
    Sentence("clean up", Tag.EXPLANATION, LockPolicy.NONE),
]
for s in score(sentences, ["clean"]):
    print(s.index, s.level.name, s.score, s.signals)

metrics = compute("", sentences)      # empty text: the sentences are joined
print(render_human(metrics))
print(render_json(metrics))
print(count_tokens("Hello, world!"))  # 4
print(contains_word("cleanup the code", "clean"))  # False
```

Pressure levels are `Level.LOW` (score below 30), `Level.MEDIUM` (30 to 59)
and `Level.HIGH` (60 and above). Metrics cover token weight, vector integrity
(share of locked sentences) and the CPD, TTC and CDR projections.

## Oracul

```python
from vectorpad.mapping import map_sentences, extract_question
from vectorpad.oracul_client import OraculClient, APIError
from vectorpad.oracul_types import ConsultRequest, OutcomeRequest

client = OraculClient("http://localhost:8080", api_key="placeholder")
filing = map_sentences(sentences)
question = extract_question(sentences, "full directive text")
gate = client.preflight_gate(question, filing)
if gate.allowed:
    raw = client.consult(ConsultRequest(question=question, filing=filing))  # bytes
status = client.account()
precedents = client.search_precedents(question, 3)
client.report_outcome("case-001", OutcomeRequest(result="success"))
```

The key is sent in the `X-Oracul-Key` header when it is not empty. Non-200
responses raise `APIError`, which carries `status_code` and `message`; a
response body that is not JSON raises `ValueError`.

## Flight log

```python
from vectorpad.flight import Recorder, Record, MetricsSnapshot

recorder = Recorder.default()          # ~/.vectorpad/flight/log.jsonl
stored = recorder.append(Record(target="clipboard", text="update all repos",
                                metrics=MetricsSnapshot(tokens=4, cdr=0.7)))
recorder.annotate(stored.id, "good", "worked first time")
for record in recorder.recent(10):     # newest first
    print(record.id, record.outcome, record.text)
print(recorder.compute_stats())
```

`Recorder(path)` uses any file. The log is one JSON object per line;
malformed lines are skipped when reading. `annotate` and `update_oracul`
raise `LookupError` for an unknown id and rewrite the file through a
temporary file.

## What this package does not do

- It does not classify text into sentences: `Sentence` objects with their tag
  and lock policy must be built by the caller.
- It has no command-line program and no interactive screen; it is used as a
  library.

## Tests

```
pytest
```