"""Tests for the pipeline runner and the command line."""

import pytest

from autotrans.automaton.equivalence import accepts, language_equals
from autotrans.automaton.model import EPSILON, Automaton
from autotrans.cli import build_arg_parser, main
from autotrans.config import Config
from autotrans.exceptions import StageError
from autotrans.io.parser import parse_file
from autotrans.io.serializer import write_file
from autotrans.pipeline import Operation, Options, Stage, run_pipeline, stage


NONDETERMINISTIC = """\
Estados
2
q0 q1

Estados de aceptación
1
q1

Alfabeto
1
a

Transiciones
2
q0 a q0
q0 a q1
"""


class TestPipeline:
    def test_default_determinizes(self, ends_with_b):
        result = run_pipeline(ends_with_b, Options())
        assert result.deterministic
        assert result.size == 2

    def test_minimize_then_trim(self, a_star_b):
        result = run_pipeline(a_star_b, Options(minimize=True, trim=True))
        assert result == a_star_b

    def test_trim_only_keeps_nfa(self, ends_with_b):
        result = run_pipeline(ends_with_b, Options(trim=True))
        assert result == ends_with_b

    def test_combine(self, ends_with_b, contains_aa):
        result = run_pipeline(
            ends_with_b, Options(operation=Operation.UNION), operand=contains_aa
        )
        assert accepts(result, "aa")
        assert accepts(result, "b")
        assert not accepts(result, "a")

    def test_complement(self, even_ones):
        result = run_pipeline(even_ones, Options(operation=Operation.COMPLEMENT))
        assert accepts(result, "1")

    def test_combine_failure_names_stage(self, ends_with_b, even_ones):
        with pytest.raises(StageError) as info:
            run_pipeline(
                ends_with_b, Options(operation=Operation.INTERSECTION), operand=even_ones
            )
        assert info.value.stage == "combine"
        assert str(info.value).startswith("combine: ")

    def test_determinize_failure_names_stage(self):
        automaton = Automaton(size=2, alphabet=(), transitions=[(0, EPSILON, 1)])
        with pytest.raises(StageError) as info:
            run_pipeline(automaton, Options())
        assert info.value.stage == "determinize"

    def test_state_limit_names_stage(self, fourth_from_last):
        with pytest.raises(StageError) as info:
            run_pipeline(fourth_from_last, Options(minimize=True), config=Config(max_states=4))
        assert info.value.stage == "determinize"

    def test_io_error_names_stage(self):
        with pytest.raises(StageError) as info:
            with stage(Stage.OUTPUT):
                raise OSError("disk full")
        assert str(info.value) == "output: disk full"
        assert isinstance(info.value.cause, OSError)

    def test_binary_operation_needs_operand(self, ends_with_b):
        with pytest.raises(ValueError):
            run_pipeline(ends_with_b, Options(operation=Operation.DIFFERENCE))


class TestArguments:
    def test_defaults(self):
        args = build_arg_parser().parse_args(["in.txt", "out.txt"])
        assert not args.determinize
        assert not args.partial
        assert args.max_states == 100000

    def test_operations_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_arg_parser().parse_args(["a", "b", "--complement", "--union", "c"])


class TestMain:
    def test_determinize_file(self, tmp_path, ends_with_b):
        source = tmp_path / "in.txt"
        target = tmp_path / "out.txt"
        write_file(ends_with_b, str(source))

        assert main([str(source), str(target)]) == 0
        result = parse_file(str(target))
        assert result.is_deterministic
        assert language_equals(result, ends_with_b)

    def test_minimize_partial(self, tmp_path, epsilon_nfa):
        source = tmp_path / "in.txt"
        target = tmp_path / "out.txt"
        write_file(epsilon_nfa, str(source))

        assert main([str(source), str(target), "--minimize", "--trim"]) == 0
        result = parse_file(str(target))
        assert result.size == 4
        assert language_equals(result, epsilon_nfa)

    def test_difference(self, tmp_path, contains_aa, ends_with_b):
        left = tmp_path / "left.txt"
        right = tmp_path / "right.txt"
        target = tmp_path / "out.txt"
        write_file(contains_aa, str(left))
        write_file(ends_with_b, str(right))

        assert main([str(left), str(target), "--difference", str(right)]) == 0
        result = parse_file(str(target))
        assert accepts(result, "aa")
        assert not accepts(result, "aab")

    def test_parse_error(self, tmp_path, capsys):
        source = tmp_path / "in.txt"
        source.write_text("Estados\nmany\n", encoding="utf-8")

        assert main([str(source), str(tmp_path / "out.txt")]) == 1
        err = capsys.readouterr().err
        assert "validate:" in err
        assert "line 2" in err

    def test_alphabet_mismatch(self, tmp_path, capsys, ends_with_b, even_ones):
        left = tmp_path / "left.txt"
        right = tmp_path / "right.txt"
        write_file(ends_with_b, str(left))
        write_file(even_ones, str(right))

        assert main([str(left), str(tmp_path / "out.txt"), "--union", str(right)]) == 1
        assert "combine:" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.txt"), str(tmp_path / "out.txt")]) == 1
        err = capsys.readouterr().err
        assert "validate:" in err
        assert "nope.txt" in err
        assert not (tmp_path / "out.txt").exists()

    def test_missing_operand(self, tmp_path, capsys, ends_with_b):
        source = tmp_path / "in.txt"
        write_file(ends_with_b, str(source))

        operand = str(tmp_path / "nope.txt")
        code = main([str(source), str(tmp_path / "out.txt"), "--union", operand])
        assert code == 1
        assert "validate:" in capsys.readouterr().err

    def test_unwritable_output(self, tmp_path, capsys, ends_with_b):
        source = tmp_path / "in.txt"
        write_file(ends_with_b, str(source))
        target = tmp_path / "missing" / "out.txt"

        assert main([str(source), str(target)]) == 1
        err = capsys.readouterr().err
        assert "output:" in err
        assert "out.txt" in err

    def test_determinized_states_named_after_subsets(self, tmp_path):
        source = tmp_path / "in.txt"
        target = tmp_path / "out.txt"
        source.write_text(NONDETERMINISTIC, encoding="utf-8")

        assert main([str(source), str(target)]) == 0
        text = target.read_text(encoding="utf-8")
        assert "{q0} {q0,q1}" in text.splitlines()
        assert "{q0} a {q0,q1}" in text.splitlines()
        assert parse_file(str(target)).names == ("{q0}", "{q0,q1}")

    def test_sink_named(self, tmp_path):
        source = tmp_path / "in.txt"
        target = tmp_path / "out.txt"
        source.write_text(NONDETERMINISTIC.replace("2\nq0 a q0\n", "1\n"), encoding="utf-8")

        assert main([str(source), str(target)]) == 0
        result = parse_file(str(target))
        assert result.names == ("{q0}", "{q1}", "!")
        assert "{q1} a !" in target.read_text(encoding="utf-8").splitlines()

    def test_state_limit(self, tmp_path, capsys, fourth_from_last):
        source = tmp_path / "in.txt"
        write_file(fourth_from_last, str(source))

        code = main([str(source), str(tmp_path / "out.txt"), "--max-states", "4"])
        assert code == 1
        assert "determinize:" in capsys.readouterr().err
