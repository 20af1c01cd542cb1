#!/usr/bin/env python3
"""
Tests for the execution dispatcher: script resolution, search path and argv
shaping, and propagation of failures from executed code.
"""

import sys
import pytest
from pylauncher.driver.dispatcher import (
    banner_text,
    dispatch,
    resolve_script_path,
    run_command,
    run_module,
    run_script,
)
from pylauncher.driver.settings import ExecutionMode, Settings
from pylauncher.shared.errors import LaunchError
from tests.test_utils import ScriptedLineEditor, fake_sys, make_runtime


class TestResolveScriptPath:
    """File, directory with entry point, failures"""

    def test_regular_file(self, tmp_path):
        script = tmp_path / "prog.py"
        script.write_text("pass\n")
        assert resolve_script_path(script) == script

    def test_directory_with_entry_point(self, tmp_path):
        (tmp_path / "__main__.py").write_text("pass\n")
        assert resolve_script_path(tmp_path) == tmp_path / "__main__.py"

    def test_directory_without_entry_point(self, tmp_path):
        with pytest.raises(LaunchError) as info:
            resolve_script_path(tmp_path)
        assert info.value.kind == LaunchError.NO_ENTRY_POINT
        assert str(info.value) == f"can't find '__main__' module in '{tmp_path}'"

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.py"
        with pytest.raises(LaunchError) as info:
            resolve_script_path(missing)
        assert info.value.kind == LaunchError.NO_SUCH_FILE
        assert str(info.value) == f"can't open file '{missing}': No such file or directory"


class TestRunScript:
    """Script execution in the main scope"""

    def test_script_runs_in_main_scope(self, runtime, tmp_path):
        script = tmp_path / "prog.py"
        script.write_text("result = 6 * 7\nname = __name__\n")
        run_script(runtime, script)
        scope = runtime.context.globals
        assert scope["result"] == 42
        assert scope["name"] == "__main__"
        assert scope["__file__"] == str(script)

    def test_script_directory_leads_search_path(self, tmp_path):
        script = tmp_path / "prog.py"
        script.write_text("pass\n")
        runtime = make_runtime(Settings(path_list=("", "/env/a")))
        run_script(runtime, script)
        assert runtime.context.path[:3] == [str(tmp_path), "", "/env/a"]
        assert runtime.context.path.count(str(tmp_path)) == 1

    def test_directory_entry_point(self, runtime, tmp_path):
        (tmp_path / "__main__.py").write_text("ran_from = __file__\n")
        run_script(runtime, tmp_path)
        assert runtime.context.globals["ran_from"] == str(tmp_path / "__main__.py")
        assert runtime.context.path[0] == str(tmp_path)

    def test_directory_matches_direct_file_run(self, tmp_path):
        app = tmp_path / "app"
        app.mkdir()
        entry = app / "__main__.py"
        entry.write_text("total = 1 + 2\nwhere = __file__\n")

        def launch_as(target):
            mode = ExecutionMode.script(str(target), ["a", "-b"])
            runtime = make_runtime(Settings(argv=mode.argv()))
            run_script(runtime, mode.target)
            return runtime.context

        from_dir = launch_as(app)
        from_file = launch_as(entry)

        def user_names(scope):
            return {name: value for name, value in scope.items() if name != "__builtins__"}

        assert user_names(from_dir.globals) == user_names(from_file.globals)
        assert from_dir.path[0] == from_file.path[0] == str(app)
        assert from_dir.argv[1:] == from_file.argv[1:] == ["a", "-b"]
        # argv[0] is the path as given on the command line
        assert from_dir.argv[0] == str(app)
        assert from_file.argv[0] == str(entry)

    def test_missing_script_leaves_path_untouched(self, runtime, tmp_path):
        before = list(runtime.context.path)
        with pytest.raises(LaunchError):
            run_script(runtime, tmp_path / "missing.py")
        assert runtime.context.path == before

    def test_unreadable_script(self, runtime, tmp_path):
        script = tmp_path / "binary.py"
        script.write_bytes(b"\xff\xfe\xfa not text")
        with pytest.raises(LaunchError) as info:
            run_script(runtime, script)
        assert info.value.kind == LaunchError.UNREADABLE
        assert str(info.value) == f"Failed reading file '{script}': UnicodeDecodeError"

    def test_exception_propagates(self, runtime, tmp_path):
        script = tmp_path / "boom.py"
        script.write_text("raise ValueError('boom')\n")
        with pytest.raises(ValueError, match="boom"):
            run_script(runtime, script)

    def test_syntax_error_propagates(self, runtime, tmp_path):
        script = tmp_path / "broken.py"
        script.write_text("def (:\n")
        with pytest.raises(SyntaxError) as info:
            run_script(runtime, script)
        assert info.value.filename == str(script)


class TestRunCommand:
    """-c source"""

    def test_command_runs_in_main_scope(self, runtime):
        run_command(runtime, "x = [1, 2, 3]\ny = sum(x)")
        assert runtime.context.globals["y"] == 6
        assert "__file__" not in runtime.context.globals

    def test_command_source_name(self, runtime):
        with pytest.raises(NameError) as info:
            run_command(runtime, "undefined_name")
        assert info.value.__traceback__ is not None
        frames = []
        tb = info.value.__traceback__
        while tb is not None:
            frames.append(tb.tb_frame.f_code.co_filename)
            tb = tb.tb_next
        assert frames[-1] == "<string>"

    def test_argv_is_shaped_for_command(self):
        settings = Settings(argv=ExecutionMode.command("pass", ["a", "b"]).argv())
        runtime = make_runtime(settings)
        runtime.context.activate()
        assert runtime.context.argv == ["-c", "a", "b"]


class TestRunModule:
    """-m module, delegated to runpy against the real interpreter"""

    def test_module_runs_as_main(self, runtime, tmp_path, monkeypatch):
        (tmp_path / "probe_module_main.py").write_text(
            "import sys\n"
            "if __name__ == '__main__':\n"
            "    raise RuntimeError(sys.argv[0])\n"
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        monkeypatch.setattr(sys, "argv", ["-m", "extra"])
        with pytest.raises(RuntimeError) as info:
            run_module(runtime, "probe_module_main")
        assert str(info.value).endswith("probe_module_main.py")

    def test_missing_module(self, runtime):
        with pytest.raises(ImportError):
            run_module(runtime, "no_such_module_for_pylauncher_tests")


class TestDispatch:
    """Mode to strategy"""

    def test_dispatch_command(self, runtime):
        dispatch(runtime, ExecutionMode.command("z = 9"))
        assert runtime.context.globals["z"] == 9

    def test_dispatch_script(self, runtime, tmp_path):
        script = tmp_path / "prog.py"
        script.write_text("z = 10\n")
        dispatch(runtime, ExecutionMode.script(str(script)))
        assert runtime.context.globals["z"] == 10

    def test_dispatch_interactive_prints_banner(self, runtime, reporter, tmp_path, capsys):
        editor = ScriptedLineEditor(["1 + 1"])
        dispatch(
            runtime,
            ExecutionMode.interactive(),
            editor=editor,
            history_path=tmp_path / "history.txt",
            reporter=reporter,
            environ={},
        )
        out = capsys.readouterr().out
        assert out.startswith(banner_text())
        assert out.endswith("2\n")
        assert runtime.context.globals["_"] == 2
        assert editor.prompts == [">>> ", ">>> "]

    def test_quiet_suppresses_banner(self, reporter, tmp_path, capsys):
        runtime = make_runtime(Settings(quiet=True))
        dispatch(
            runtime,
            ExecutionMode.interactive(),
            editor=ScriptedLineEditor([]),
            history_path=tmp_path / "history.txt",
            reporter=reporter,
            environ={},
        )
        assert capsys.readouterr().out == ""

    def test_default_prompts_installed_when_unset(self, reporter, tmp_path):
        runtime = make_runtime(Settings(), sys_module=fake_sys())
        editor = ScriptedLineEditor(["if True:", "    pass", ""])
        dispatch(
            runtime,
            ExecutionMode.interactive(),
            editor=editor,
            history_path=tmp_path / "history.txt",
            reporter=reporter,
            environ={},
        )
        assert editor.prompts == [">>> ", "... ", "... ", ">>> "]

    def test_startup_file_from_environment(self, runtime, reporter, tmp_path):
        startup = tmp_path / "startup.py"
        startup.write_text("from_startup = True\n")
        dispatch(
            runtime,
            ExecutionMode.interactive(),
            editor=ScriptedLineEditor(["from_startup"]),
            history_path=tmp_path / "history.txt",
            reporter=reporter,
            environ={"PYTHONSTARTUP": str(startup)},
        )
        assert runtime.context.globals["_"] is True

    def test_startup_file_ignored_with_E(self, reporter, tmp_path):
        startup = tmp_path / "startup.py"
        startup.write_text("from_startup = True\n")
        runtime = make_runtime(Settings(ignore_environment=True))
        dispatch(
            runtime,
            ExecutionMode.interactive(),
            editor=ScriptedLineEditor([]),
            history_path=tmp_path / "history.txt",
            reporter=reporter,
            environ={"PYTHONSTARTUP": str(startup)},
        )
        assert "from_startup" not in runtime.context.globals


if __name__ == "__main__":
    pytest.main([__file__])
