"""End-to-end tests for the command-line viewer."""

import io

import cv2
import pytest

from threshold_viewer.main import build_parser, main, run
from threshold_viewer.ui.view import ConsoleView


@pytest.fixture
def image_path(tmp_path, png_bytes):
    path = tmp_path / "sample.png"
    path.write_bytes(png_bytes)
    return path


@pytest.mark.asyncio
async def test_run_writes_comparison(service, image_path, tmp_path, processed_data_uri, test_image):
    service.process_body = {
        "success": True,
        "threshold_value": 128.0,
        "processed_image_base64": processed_data_uri,
    }
    output = tmp_path / "side_by_side.png"
    processed = tmp_path / "processed.png"
    args = build_parser().parse_args(
        [str(image_path), "--base-url", "http://testserver", "--output", str(output), "--save-processed", str(processed)]
    )
    stream = io.StringIO()

    async with service.http() as http:
        code = await run(args, view=ConsoleView(stream), http=http)

    assert code == 0
    assert "Threshold Value: 128" in stream.getvalue()
    assert "[success]" in stream.getvalue()

    combined = cv2.imread(str(output))
    height, width = test_image.shape[:2]
    assert combined.shape == (height, width * 2 + 8, 3)
    assert cv2.imread(str(processed), cv2.IMREAD_GRAYSCALE).shape == (height, width)


@pytest.mark.asyncio
async def test_run_reports_failure(service, image_path):
    service.process_body = {"success": False, "error": "bad format"}
    args = build_parser().parse_args([str(image_path), "--base-url", "http://testserver"])
    stream = io.StringIO()

    async with service.http() as http:
        code = await run(args, view=ConsoleView(stream), http=http)

    assert code == 1
    assert "[error] Error: bad format" in stream.getvalue()


@pytest.mark.asyncio
async def test_run_rejects_non_image(service, tmp_path):
    text_path = tmp_path / "notes.txt"
    text_path.write_text("hello")
    args = build_parser().parse_args([str(text_path), "--base-url", "http://testserver"])
    stream = io.StringIO()

    async with service.http() as http:
        code = await run(args, view=ConsoleView(stream), http=http)

    assert code == 1
    assert service.uploads == []
    assert "Please select a valid image file" in stream.getvalue()


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.png")]) == 1
    assert "No such file" in capsys.readouterr().err


def test_console_view_writes_to_stream():
    stream = io.StringIO()
    view = ConsoleView(stream)

    view.set_loading(True)
    view.set_loading(False)

    assert stream.getvalue() == "Processing...\n"
    assert not view.loading_visible
