import threading

from openapi_to_code.errors import GenerationError
from openapi_to_code.pipeline import ErrorAggregator, parallel_generate
from openapi_to_code.schema_model import SchemaNode


def _upper(name, node, out):
    out.write(name.upper())


def test_results_are_sorted_by_name():
    entries = [(name, SchemaNode()) for name in ["c", "a", "b", "e", "d"]]
    results = parallel_generate(entries, _upper, ErrorAggregator(), max_workers=3)

    assert results == [("a", "A"), ("b", "B"), ("c", "C"), ("d", "D"), ("e", "E")]


def test_runs_on_several_threads():
    barrier = threading.Barrier(2, timeout=5)

    def generate(name, node, out):
        # Both tasks must be running at the same time to pass the barrier
        barrier.wait()
        out.write(name)

    results = parallel_generate([("a", SchemaNode()), ("b", SchemaNode())], generate, ErrorAggregator(), max_workers=2)
    assert [name for name, _ in results] == ["a", "b"]


def test_failing_task_is_recorded():
    errors = ErrorAggregator()

    def generate(name, node, out):
        if name == "bad":
            raise RuntimeError("boom")
        out.write(name)

    results = parallel_generate([("bad", SchemaNode()), ("good", SchemaNode())], generate, errors)

    assert results == [("good", "good")]
    assert errors.count == 1
    assert isinstance(errors.errors[0], GenerationError)
    assert str(errors.errors[0]) == "schema bad: generation failed: boom"


def test_failing_task_keeps_partial_text():
    errors = ErrorAggregator()

    def generate(name, node, out):
        out.write(f"type {name} struct {{\n")
        if name == "Bad":
            raise RuntimeError("boom")
        out.write("}\n\n")

    results = parallel_generate([("Bad", SchemaNode()), ("Good", SchemaNode())], generate, errors)

    assert results == [("Bad", "type Bad struct {\n"), ("Good", "type Good struct {\n}\n\n")]
    assert errors.count == 1


def test_no_entries():
    assert parallel_generate([], _upper, ErrorAggregator()) == []
