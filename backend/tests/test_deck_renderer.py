import io

from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE

from smartppt.core.deck_renderer import (
    MEDIA_TYPES,
    decode_data_url,
    download_filename,
    render_deck,
    render_pdf,
    render_pptx,
)
from smartppt.schemas.deck_content import DeckContent, Slide

from conftest import PNG_DATA_URL


def make_deck() -> DeckContent:
    return DeckContent(
        title="Intro to AI!",
        slides=[
            Slide(title="What is AI?", bullets=["Machines that learn", "Pattern recognition", "Decision making"]),
            Slide(title="Uses", bullets=["Search", "Translation"], image_url=PNG_DATA_URL),
            Slide(title="Remote image", bullets=["Not fetched"], image_url="https://example.com/a.png"),
        ],
    )


def test_download_filename_replaces_non_alphanumerics():
    assert download_filename("Intro to AI!", "pptx") == "Intro_to_AI_.pptx"
    assert download_filename("Café 2024", "pdf") == "Caf__2024.pdf"


def test_decode_data_url():
    assert decode_data_url(PNG_DATA_URL).startswith(b"\x89PNG")
    assert decode_data_url("https://example.com/a.png") is None
    assert decode_data_url(None) is None


def test_render_pptx_has_cover_and_one_slide_per_entry():
    prs = Presentation(io.BytesIO(render_pptx(make_deck())))
    slides = list(prs.slides)

    assert len(slides) == 4
    assert slides[0].shapes.title.text == "Intro to AI!"
    assert slides[0].placeholders[1].text == "Generated with Smart PPT"
    assert [s.shapes.title.text for s in slides[1:]] == ["What is AI?", "Uses", "Remote image"]
    body = [p.text for p in slides[1].placeholders[1].text_frame.paragraphs]
    assert body == ["Machines that learn", "Pattern recognition", "Decision making"]
    assert prs.core_properties.title == "Intro to AI!"
    assert prs.core_properties.author == "Smart PPT Generator"


def test_render_pptx_embeds_only_data_url_images():
    prs = Presentation(io.BytesIO(render_pptx(make_deck())))
    pictures = [
        [shape for shape in slide.shapes if shape.shape_type == MSO_SHAPE_TYPE.PICTURE]
        for slide in prs.slides
    ]
    assert [len(p) for p in pictures] == [0, 0, 1, 0]


def test_render_pdf_produces_a_pdf():
    data = render_pdf(make_deck())
    assert data.startswith(b"%PDF")


def test_render_deck_returns_media_type_and_filename():
    data, media_type, filename = render_deck(make_deck(), "pdf")
    assert data.startswith(b"%PDF")
    assert media_type == MEDIA_TYPES["pdf"]
    assert filename == "Intro_to_AI_.pdf"


def test_render_endpoint_pptx(client):
    response = client.post("/api/v1/render", json=make_deck().model_dump(by_alias=True))

    assert response.status_code == 200
    assert response.headers["content-type"] == MEDIA_TYPES["pptx"]
    assert response.headers["content-disposition"] == 'attachment; filename="Intro_to_AI_.pptx"'
    assert len(Presentation(io.BytesIO(response.content)).slides) == 4


def test_render_endpoint_pdf(client):
    response = client.post("/api/v1/render?format=pdf", json={"title": "Deck", "slides": []})

    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")
    assert response.headers["content-disposition"] == 'attachment; filename="Deck.pdf"'


def test_render_endpoint_rejects_unknown_format(client):
    response = client.post("/api/v1/render?format=docx", json={"title": "Deck", "slides": []})
    assert response.status_code == 422
