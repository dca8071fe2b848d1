"""
Pytest configuration and fixtures for backend tests
"""
import pytest
from fastapi.testclient import TestClient

from brandguard.main import app
from brandguard.models import BrandRules, Bounds, DocumentSnapshot, LayerSnapshot


@pytest.fixture
def client():
    """Create a test client for the FastAPI application"""
    return TestClient(app)


@pytest.fixture
def brand_rules():
    """The built-in Enterprise Brand rules"""
    return BrandRules()


@pytest.fixture
def compliant_document():
    """A document that passes every brand rule"""
    return DocumentSnapshot(
        width=1920,
        height=1080,
        layers=[
            LayerSnapshot(
                id="bg", name="Background",
                bounds=Bounds(x=0, y=0, width=1920, height=1080),
                fill="#FFFFFF"
            ),
            LayerSnapshot(
                id="headline", name="Headline", type="text",
                bounds=Bounds(x=400, y=400, width=1100, height=120),
                text_color="#003D7A", font_family="Open Sans Bold"
            ),
            LayerSnapshot(
                id="logo", name="Company Logo",
                bounds=Bounds(x=40, y=40, width=200, height=100),
                fill="#0066CC"
            ),
        ]
    )


@pytest.fixture
def sample_document_with_issues():
    """A document with violations in every category"""
    return {
        "width": 1920,
        "height": 1080,
        "layers": [
            {
                "id": "bg",
                "name": "Background",
                "type": "generic",
                "bounds": {"x": 0, "y": 0, "width": 1920, "height": 1080},
                "fill": "#FF0000",
            },
            {
                "id": "headline",
                "name": "Headline",
                "type": "text",
                "bounds": {"x": 400, "y": 400, "width": 1100, "height": 120},
                "textColor": {"r": 18, "g": 200, "b": 40},
                "fontFamily": "Comic Sans MS",
            },
            {
                "id": "logo",
                "name": "Logo",
                "type": "generic",
                "bounds": {"x": 10, "y": 10, "width": 50, "height": 30},
                "fill": "#0066CC",
            },
        ],
    }
