from dataclasses import FrozenInstanceError
from unittest.mock import MagicMock, patch

import pytest

from conftest import make_operation, ok_response
from modules.batch import (
    BatchResult,
    iter_batch_results,
    run_batch,
    validate_batch_inputs,
    video_file_name,
)
from modules.config import ImageFile
from modules.errors import GenerationFailedError


def _images(n):
    return [ImageFile(file_name=f"img{i}.png", data=f"data{i}".encode(), mime_type="image/png") for i in range(1, n + 1)]


def test_one_result_per_image_in_order_even_when_all_fail():
    def generate(*args, **kwargs):
        raise GenerationFailedError("nope")

    results = run_batch("key", _images(4), "prompt", "16:9", generate=generate)

    assert [r.file_name for r in results] == ["img1.png", "img2.png", "img3.png", "img4.png"]
    assert all(r.error == "Video generation failed: nope" for r in results)
    assert all(r.video is None for r in results)


def test_middle_failure_is_isolated_and_published_incrementally():
    calls = []

    def generate(api_key, image_bytes, mime_type, prompt, aspect_ratio, on_progress):
        calls.append(image_bytes)
        if image_bytes == b"data2":
            raise GenerationFailedError("internal error")
        return b"video-" + image_bytes

    snapshots = []
    results = run_batch("key", _images(3), "prompt", "9:16", on_update=snapshots.append, generate=generate)

    assert calls == [b"data1", b"data2", b"data3"]
    assert [len(s) for s in snapshots] == [1, 2, 3]
    assert snapshots[0] == results[:1]
    assert results[0] == BatchResult("img1.png", b"data1", video=b"video-data1")
    assert results[1] == BatchResult("img2.png", b"data2", error="Video generation failed: internal error")
    assert results[2].ok and results[2].video == b"video-data3"
    assert [r.ok for r in results] == [True, False, True]


def test_snapshots_are_immutable_tuples():
    gen = iter_batch_results("key", _images(2), "p", "1:1", generate=lambda *a, **k: b"v")
    first = next(gen)
    second = next(gen)
    assert isinstance(first, tuple) and len(first) == 1
    assert len(second) == 2
    with pytest.raises(FrozenInstanceError):
        first[0].error = "changed"


def test_progress_is_prefixed_with_position():
    def generate(api_key, image_bytes, mime_type, prompt, aspect_ratio, on_progress):
        on_progress("working")
        return b"v"

    messages = []
    run_batch("key", _images(3), "p", "16:9", on_progress=messages.append, generate=generate)
    assert messages == ["(1/3) working", "(2/3) working", "(3/3) working"]


def test_exception_without_text_gets_generic_message():
    def generate(*args, **kwargs):
        raise RuntimeError()

    results = run_batch("key", _images(1), "p", "16:9", generate=generate)
    assert results[0].error == "An unexpected error occurred."


def test_empty_batch_yields_nothing():
    assert run_batch("key", [], "p", "16:9", generate=MagicMock()) == ()


def test_batch_with_real_orchestrator_and_stub_service():
    done_ok = make_operation(done=True)
    failed = make_operation(done=True, error={"code": 13, "message": "internal error"})
    client = MagicMock()
    client.models.generate_videos.side_effect = [done_ok, failed, done_ok]

    with patch("modules.video_generator.requests.get", return_value=ok_response(b"MP4")):
        results = run_batch(
            "key", _images(3), "p", "16:9",
            client=client, sleep=lambda s: None, progress_interval=60,
        )

    assert [r.video for r in results] == [b"MP4", None, b"MP4"]
    assert results[1].error == "Video generation failed: internal error"


@pytest.mark.parametrize("api_key, images, prompt, expected", [
    ("", _images(1), "p", "API Key is missing. Please add it in the settings."),
    ("k", [], "p", "Please upload at least one image."),
    ("k", _images(1), "   ", "Please enter a prompt to animate the image(s)."),
    ("k", _images(1), "p", None),
])
def test_validate_batch_inputs(api_key, images, prompt, expected):
    assert validate_batch_inputs(api_key, images, prompt) == expected


def test_video_file_name():
    assert video_file_name("cat.png") == "animation-cat.png.mp4"
