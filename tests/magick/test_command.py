"""
Tests for the Command builder
"""

import asyncio
import logging
import threading
from unittest.mock import Mock

import pytest

from core.enums import CommandEvent, CommandState
from core.exceptions import UnknownOption, UnrecognizedGeometryOption, UnsupportedArgumentType
from core.executor import ExecutionResult
from magick.command import Command

EXPECTED_ARGS = (
    "-define 'jpeg:size=256x256' image.png -auto-orient -fuzz 5 -trim +repage -strip "
    "-thumbnail '128x128>' -unsharp '0x0.5+1+0.05' out.png"
)


class BlockingExecutor:
    """Executor that holds the process open until release is set"""

    def __init__(self):
        self.release = threading.Event()
        self.calls = []

    async def __call__(self, command_line: str) -> ExecutionResult:
        self.calls.append(command_line)
        await asyncio.get_running_loop().run_in_executor(None, self.release.wait, 5)
        return ExecutionResult(error=None, stdout="done", stderr="", returncode=0)


def build_thumbnail(cmd: Command) -> Command:
    return (
        cmd.define({"jpeg": {"size": {"width": 256, "height": 256}}})
        .add("image.png")
        .auto_orient()
        .fuzz(5)
        .trim()
        .repage(True)
        .strip()
        .thumbnail({"width": 128, "height": 128, "onlyShrink": True})
        .unsharp(0.5)
        .add("out.png")
    )


class TestCommandChaining:
    """Fluent option accumulation"""

    def test_full_chain(self, success_executor):
        cmd = build_thumbnail(Command(executor=success_executor))
        assert cmd.args == EXPECTED_ARGS
        assert cmd.command_line == f"convert {EXPECTED_ARGS}"

    def test_chain_returns_same_instance(self, success_executor):
        cmd = Command(executor=success_executor)
        assert cmd.strip() is cmd
        assert cmd.option("trim") is cmd
        assert cmd.reset("repage") is cmd

    def test_camel_case_method(self, success_executor):
        cmd = Command(executor=success_executor).autoOrient()
        assert cmd.args == "-auto-orient"

    def test_explicit_reset(self, success_executor):
        cmd = Command(executor=success_executor).reset("repage").reset("thumbnail")
        assert cmd.args == "+repage +thumbnail"

    def test_reset_of_value_option_has_no_value(self, success_executor):
        cmd = Command(executor=success_executor).gravity(False)
        assert cmd.args == "+gravity"

    def test_custom_command_name(self, success_executor):
        cmd = Command(command="magick", executor=success_executor).add("in.png", "out.webp")
        assert cmd.command_line == "magick in.png out.webp"

    def test_empty_command_line(self, success_executor):
        assert Command(executor=success_executor).command_line == "convert"

    def test_dir_lists_options(self, success_executor):
        assert "thumbnail" in dir(Command(executor=success_executor))


class TestCommandErrors:
    """Build-time errors"""

    def test_unknown_option_attribute(self, success_executor):
        cmd = Command(executor=success_executor).strip()
        with pytest.raises(UnknownOption) as exc_info:
            cmd.frobnicate(1)
        assert str(exc_info.value) == "No such option `frobnicate`"
        assert cmd.args == "-strip"

    def test_unknown_option_in_list(self, success_executor):
        with pytest.raises(UnknownOption):
            Command(["strip", "frobnicate"], executor=success_executor)

    def test_unknown_option_in_mapping(self, success_executor):
        with pytest.raises(UnknownOption) as exc_info:
            Command([{"frobnicate": 1}], executor=success_executor)
        assert "frobnicate" in str(exc_info.value)

    def test_hasattr_on_unknown_option(self, success_executor):
        assert not hasattr(Command(executor=success_executor), "frobnicate")

    def test_function_item_is_unsupported(self, success_executor):
        def hook():
            pass

        with pytest.raises(UnsupportedArgumentType) as exc_info:
            Command([hook], executor=success_executor)
        assert str(exc_info.value).startswith("Unsupported argument type `function` of argument `")

    def test_number_item_is_unsupported(self, success_executor):
        with pytest.raises(UnsupportedArgumentType) as exc_info:
            Command([42], executor=success_executor)
        assert str(exc_info.value) == "Unsupported argument type `int` of argument `42`"

    def test_failed_call_appends_nothing(self, success_executor):
        cmd = Command(executor=success_executor).strip()
        with pytest.raises(UnrecognizedGeometryOption):
            cmd.resize({"bogus": 1})
        assert cmd.tokens == [["-strip"]]

    def test_private_attribute_is_plain_attribute_error(self, success_executor):
        cmd = Command(executor=success_executor)
        with pytest.raises(AttributeError) as exc_info:
            cmd._missing
        assert not isinstance(exc_info.value, UnknownOption)


class TestCommandFromList:
    """Declarative construction"""

    def test_list_matches_chain(self, success_executor):
        args = [
            {"define": {"jpeg": {"size": {"width": 256, "height": 256}}}},
            {"add": "image.png"},
            "autoOrient",
            {"fuzz": 5},
            "trim",
            {"repage": True},
            "strip",
            {"thumbnail": {"width": 128, "height": 128, "onlyShrink": True}},
            {"unsharp": 0.5},
            {"add": "out.png"},
        ]
        cmd = Command(args, executor=success_executor)
        assert cmd.args == EXPECTED_ARGS

    def test_boolean_items_are_placeholders(self, success_executor):
        cmd = Command([False, "strip", True], executor=success_executor)
        assert cmd.args == "-strip"

    def test_mapping_with_several_keys(self, success_executor):
        cmd = Command([{"gravity": "center", "extent": "100x100"}], executor=success_executor)
        assert cmd.args == "-gravity center -extent '100x100'"

    def test_sequence_value_is_spread(self, success_executor):
        cmd = Command([{"add": ["-size", "10x10", "xc:white"]}], executor=success_executor)
        assert cmd.args == "-size 10x10 xc:white"

    def test_none_value_renders_flag(self, success_executor):
        cmd = Command([{"flatten": None}], executor=success_executor)
        assert cmd.args == "-flatten"

    def test_apply_after_construction(self, success_executor):
        cmd = Command(["strip"], executor=success_executor).apply({"quality": 85})
        assert cmd.args == "-strip -quality 85"


class TestCommandState:
    """Lifecycle"""

    def test_transitions(self, success_executor):
        cmd = Command(executor=success_executor)
        assert cmd.state == CommandState.IDLE

        cmd.strip()
        assert cmd.state == CommandState.ACCUMULATING

        cmd.run().join()
        assert cmd.state == CommandState.EXECUTED

    def test_seeded_instance_is_accumulating(self, success_executor):
        assert Command(["strip"], executor=success_executor).state == CommandState.ACCUMULATING


class TestCommandExecution:
    """Completion via events or callback"""

    def test_events_on_success(self, success_executor):
        cmd = Command(executor=success_executor).add("in.png", "out.png")
        calls = []
        cmd.on(CommandEvent.DONE, lambda err, out, errout: calls.append(("done", err, out)))
        cmd.on("run_success", lambda out: calls.append(("run_success", out)))
        cmd.on("run_error", lambda err: calls.append(("run_error", err)))

        result = cmd.run_sync()

        assert result.success
        assert calls == [("done", None, "ok"), ("run_success", "ok")]
        assert success_executor.calls == ["convert in.png out.png"]

    def test_events_on_failure(self, failing_executor):
        cmd = Command(executor=failing_executor).add("broken.png")
        calls = []
        cmd.on("done", lambda err, out, errout: calls.append("done"))
        cmd.on("run_success", lambda out: calls.append("run_success"))
        cmd.on("run_error", lambda err: calls.append(("run_error", err.returncode)))

        cmd.run_sync()

        assert calls == ["done", ("run_error", 1)]

    def test_callback_suppresses_events(self, success_executor):
        callback = Mock()
        listener = Mock()
        cmd = Command(executor=success_executor).strip()
        cmd.on("done", listener)
        cmd.on("run_success", listener)

        cmd.run_sync(callback)

        callback.assert_called_once_with(None, "ok", "")
        listener.assert_not_called()

    def test_constructor_callback_starts_run(self, success_executor):
        callback = Mock()
        cmd = Command(["strip"], callback=callback, executor=success_executor)
        cmd.thread.join(timeout=5)

        callback.assert_called_once_with(None, "ok", "")
        assert success_executor.calls == ["convert -strip"]
        assert cmd.state == CommandState.EXECUTED

    def test_callback_receives_error(self, failing_executor):
        callback = Mock()
        cmd = Command(["strip"], callback=callback, executor=failing_executor)
        cmd.thread.join(timeout=5)

        error, stdout, stderr = callback.call_args.args
        assert error.returncode == 1
        assert stdout == ""
        assert "unable to open image" in stderr

    def test_run_twice_repeats_execution(self, success_executor):
        callback = Mock()
        cmd = Command(executor=success_executor).strip()
        cmd.run(callback).join()
        cmd.quality(90)
        cmd.run().join()

        assert callback.call_count == 2
        assert success_executor.calls == ["convert -strip", "convert -strip -quality 90"]

    def test_run_inside_event_loop_returns_task(self, success_executor):
        callback = Mock()

        async def scenario():
            cmd = Command(executor=success_executor).strip()
            task = cmd.run(callback)
            assert isinstance(task, asyncio.Task)
            # Scheduled, not yet executed
            callback.assert_not_called()
            result = await task
            return cmd, result

        cmd, result = asyncio.run(scenario())

        assert result.success
        assert cmd.task is not None
        callback.assert_called_once_with(None, "ok", "")

    def test_execute_returns_result(self, failing_executor):
        cmd = Command(executor=failing_executor).strip()
        errors = []
        cmd.on("run_error", errors.append)

        result = asyncio.run(cmd.execute())

        assert not result.success
        assert result.returncode == 1
        assert errors == [result.error]


class TestCommandBackgroundRun:
    """run() returns before the process exits"""

    def test_constructor_returns_before_process_exits(self):
        executor = BlockingExecutor()
        callback = Mock()

        cmd = Command(["strip"], callback=callback, executor=executor)

        assert isinstance(cmd.thread, threading.Thread)
        callback.assert_not_called()

        executor.release.set()
        cmd.thread.join(timeout=5)

        callback.assert_called_once_with(None, "done", "")

    def test_run_outside_loop_returns_thread(self):
        executor = BlockingExecutor()
        done = []
        cmd = Command(executor=executor).strip()
        cmd.on("done", lambda err, out, errout: done.append(out))

        thread = cmd.run()

        assert thread is cmd.thread
        assert done == []
        assert cmd.state == CommandState.EXECUTED

        executor.release.set()
        thread.join(timeout=5)

        assert done == ["done"]

    def test_run_uses_line_at_call_time(self):
        executor = BlockingExecutor()
        cmd = Command(executor=executor).strip()

        thread = cmd.run()
        cmd.quality(90)
        executor.release.set()
        thread.join(timeout=5)

        assert executor.calls == ["convert -strip"]

    def test_failing_callback_in_thread_is_logged(self, success_executor, caplog):
        def callback(error, stdout, stderr):
            raise RuntimeError("callback exploded")

        with caplog.at_level(logging.ERROR, logger="magick.command"):
            cmd = Command(["strip"], callback=callback, executor=success_executor)
            cmd.thread.join(timeout=5)

        assert "callback exploded" in caplog.text

    def test_failing_callback_in_task_is_logged(self, success_executor, caplog):
        def callback(error, stdout, stderr):
            raise RuntimeError("listener exploded")

        async def scenario():
            cmd = Command(executor=success_executor).strip()
            task = cmd.run(callback)
            await asyncio.wait([task])
            await asyncio.sleep(0)
            return task

        with caplog.at_level(logging.ERROR, logger="magick.command"):
            task = asyncio.run(scenario())

        assert isinstance(task.exception(), RuntimeError)
        assert "listener exploded" in caplog.text
