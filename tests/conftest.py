"""Shared fixtures: test images and a fake processing service."""

import base64

import httpx
import pytest
from fastapi import FastAPI, File, UploadFile
from fastapi.responses import JSONResponse, Response

from fixtures.images.create_test_image import create_binary_image, create_test_image, encode_image
from threshold_viewer.core.config import ClientConfig
from threshold_viewer.core.files import SelectedFile


class FakeService:
    """Stand-in for the thresholding service, served in-process over ASGI."""

    def __init__(self):
        self.process_status = 200
        self.process_body: dict | None = None
        self.health_status = 200
        self.uploads: list[tuple[str, str, bytes]] = []
        self.health_calls = 0
        self.app = self._build_app()

    def _build_app(self) -> FastAPI:
        app = FastAPI()

        @app.get("/health")
        async def health():
            self.health_calls += 1
            if self.health_status != 200:
                return Response(status_code=self.health_status)
            return {"status": "healthy", "message": "Image processing service is running"}

        @app.post("/process")
        async def process(image: UploadFile = File(...)):
            content = await image.read()
            self.uploads.append((image.filename, image.content_type, content))
            if self.process_body is None:
                return Response(status_code=self.process_status)
            return JSONResponse(status_code=self.process_status, content=self.process_body)

        return app

    def http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=self.app))


@pytest.fixture
def config():
    return ClientConfig(base_url="http://testserver:8080/")


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def test_image():
    return create_test_image()


@pytest.fixture
def png_bytes(test_image):
    return encode_image(test_image, ".png")


@pytest.fixture
def png_file(png_bytes):
    return SelectedFile(content=png_bytes, media_type="image/png", filename="sample.png")


@pytest.fixture
def processed_data_uri(test_image):
    binary = encode_image(create_binary_image(test_image), ".png")
    return "data:image/png;base64," + base64.b64encode(binary).decode("ascii")


def refused_transport() -> httpx.MockTransport:
    """Transport that fails every request as if nothing were listening."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return httpx.MockTransport(handler)


@pytest.fixture
def refused_http():
    return httpx.AsyncClient(transport=refused_transport())
