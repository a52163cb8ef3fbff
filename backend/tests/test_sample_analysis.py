import pytest

from smartppt.core.deck_renderer import render_pptx
from smartppt.core.exceptions import SampleAnalysisError
from smartppt.core.sample_analysis import analyze_sample
from smartppt.schemas.deck_content import DeckContent, Slide

from conftest import PNG_DATA_URL

PPTX_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


@pytest.fixture
def sample_pptx() -> bytes:
    deck = DeckContent(
        title="Cloud Security",
        slides=[
            Slide(title="Threats", bullets=["one two", "three four", "five six"]),
            Slide(
                title="Conclusion",
                bullets=["alpha beta", "gamma delta", "epsilon zeta", "eta theta", "iota kappa"],
                image_url=PNG_DATA_URL,
            ),
        ],
    )
    return render_pptx(deck)


def test_analyze_rendered_deck(sample_pptx):
    stats = analyze_sample(sample_pptx)

    assert stats.slide_count == 3
    assert stats.average_bullets_per_slide == 4
    assert stats.average_bullet_length == 2
    assert stats.has_images is True
    assert stats.structure == "title-content-conclusion"


def test_deck_without_cover_or_closing_slide():
    data = render_pptx(DeckContent(title="T", slides=[Slide(title="Body", bullets=["a b c"])]))
    # the renderer always adds a cover slide
    assert analyze_sample(data).structure == "title-content"


def test_garbage_bytes_are_rejected():
    with pytest.raises(SampleAnalysisError) as excinfo:
        analyze_sample(b"definitely not a presentation")
    assert excinfo.value.message == "Failed to analyze sample file"


def test_analyze_sample_endpoint(client, sample_pptx):
    response = client.post(
        "/api/v1/analyze-sample",
        files={"file": ("sample.pptx", sample_pptx, PPTX_TYPE)},
    )

    assert response.status_code == 200
    assert response.json() == {
        "slideCount": 3,
        "averageBulletsPerSlide": 4,
        "averageBulletLength": 2,
        "hasImages": True,
        "structure": "title-content-conclusion",
    }


def test_analyze_sample_endpoint_rejects_other_extensions(client):
    response = client.post(
        "/api/v1/analyze-sample",
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Please upload a .pptx file"}


def test_analyze_sample_endpoint_rejects_corrupt_pptx(client):
    response = client.post(
        "/api/v1/analyze-sample",
        files={"file": ("broken.pptx", b"PK not really", PPTX_TYPE)},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Failed to analyze sample file"}
