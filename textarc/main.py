"""textarc microservice -- FastAPI application.

Endpoints:
    POST /layout        -- Curve text, return per-glyph placements as JSON
    POST /layout/scene  -- Curve text, return the scene description
    POST /layout/svg    -- Curve text, return a top-down SVG preview
    POST /layout/png    -- Curve text, return a top-down PNG preview
    GET  /health        -- Health check

Glyphs are measured with Pillow's FreeType bindings; radius and letter
padding are clamped by the configuration rather than rejected.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from .config import (
    DEFAULT_COLOR,
    DEFAULT_EXTRUSION_DEPTH,
    DEFAULT_FONT_SIZE,
    DEFAULT_LETTER_PADDING,
    DEFAULT_RADIUS,
    CurveConfiguration,
)
from .curve import CurvedText, curve_text
from .glyphs import PillowGlyphSource
from .renderer import render_png, render_svg
from .scene import to_scene

structlog.configure(
    processors=[
        structlog.dev.ConsoleRenderer(),
    ],
)

logger = structlog.get_logger(__name__)

VERSION = "0.1.0"

app = FastAPI(
    title="textarc",
    description="Curved 3D text layout: glyph placements along an arc facing the observer",
    version=VERSION,
)

glyph_source = PillowGlyphSource()


# --------------------------------------------------------------------------
# Request / Response models
# --------------------------------------------------------------------------


class CurveRequest(BaseModel):
    """Request body for all /layout endpoints."""

    text: str = Field(
        ...,
        min_length=1,
        max_length=256,
        description="Text to lay out along the arc",
        examples=["Hello, world"],
    )
    radius: float = Field(
        default=DEFAULT_RADIUS,
        description="Arc radius in world units (clamped to a small positive minimum)",
    )
    offset: float = Field(
        default=0.0,
        description="Angle in radians the text is centered on (0 = straight ahead)",
    )
    y_position: float = Field(
        default=0.0,
        description="Vertical translation of the text container",
    )
    letter_padding: float = Field(
        default=DEFAULT_LETTER_PADDING,
        description="Spacing after each glyph (negative values are clamped to 0)",
    )
    font_size: float = Field(
        default=DEFAULT_FONT_SIZE,
        gt=0,
        description="Glyph height in world units",
    )
    extrusion_depth: float = Field(
        default=DEFAULT_EXTRUSION_DEPTH,
        ge=0,
        description="Glyph depth in world units",
    )
    color: str = Field(
        default=DEFAULT_COLOR,
        description="Material color as #RRGGBB",
    )
    roughness: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Material roughness",
    )
    is_metallic: bool = Field(
        default=False,
        description="Whether the material is metallic",
    )
    alignment: str = Field(
        default="center",
        description="Glyph alignment: left, center, right, justified, natural",
    )
    line_break_mode: str = Field(
        default="char_wrapping",
        description="Line break mode: word_wrapping, char_wrapping, clipping, truncating_head, truncating_tail, truncating_middle",
    )
    container_frame: tuple[float, float, float, float] = Field(
        default=(0.0, 0.0, 0.0, 0.0),
        description="Text container frame (x, y, width, height)",
    )
    # Preview options
    colors: list[str] | None = Field(
        default=None,
        description="Stroke palette for previews",
    )
    size: int = Field(
        default=512,
        ge=64,
        le=2048,
        description="Preview size in pixels (square)",
    )

    def configuration(self) -> CurveConfiguration:
        return CurveConfiguration(
            font_size=self.font_size,
            extrusion_depth=self.extrusion_depth,
            color=self.color,
            roughness=self.roughness,
            is_metallic=self.is_metallic,
            radius=self.radius,
            offset=self.offset,
            y_position=self.y_position,
            letter_padding=self.letter_padding,
            alignment=self.alignment,
            line_break_mode=self.line_break_mode,
            container_frame=self.container_frame,
        )


class GlyphPlacement(BaseModel):
    """One placed glyph."""

    index: int = Field(description="Index of the character in the input text")
    char: str
    angle: float = Field(description="Anchor angle in radians")
    width: float = Field(description="Glyph width in world units")
    position: list[float] = Field(description="Anchor position [x, y, z], relative to the container")
    orientation: list[float] = Field(description="Orientation quaternion [x, y, z, w]")


class DroppedChar(BaseModel):
    index: int
    char: str


class LayoutResponse(BaseModel):
    """Response body for /layout."""

    total_span: float = Field(description="Angle consumed by all glyphs, in radians")
    start_angle: float
    end_angle: float
    radius: float = Field(description="Radius actually used, after clamping")
    container_position: list[float]
    glyphs: list[GlyphPlacement]
    dropped: list[DroppedChar] = Field(
        default_factory=list,
        description="Characters that could not be measured and were skipped",
    )


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str


# --------------------------------------------------------------------------
# Endpoints
# --------------------------------------------------------------------------


def _curve(request: CurveRequest, endpoint: str) -> CurvedText:
    """Curve the requested text, mapping configuration errors to 422."""
    try:
        return curve_text(request.text, request.configuration(), glyph_source)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("curve_failed", endpoint=endpoint, error=str(e))
        raise HTTPException(status_code=500, detail="Layout failed")


@app.post("/layout", response_model=LayoutResponse)
async def layout_endpoint(request: CurveRequest) -> LayoutResponse:
    """Lay text out along an arc and return the placements."""
    curved = _curve(request, "layout")

    return LayoutResponse(
        total_span=curved.total_span,
        start_angle=-curved.total_span / 2.0 + curved.offset,
        end_angle=curved.total_span / 2.0 + curved.offset,
        radius=curved.radius,
        container_position=list(curved.position),
        glyphs=[
            GlyphPlacement(
                index=glyph.index,
                char=glyph.char,
                angle=glyph.placement.angle,
                width=glyph.metric.width,
                position=list(glyph.placement.position),
                orientation=glyph.placement.orientation.as_xyzw(),
            )
            for glyph in curved.glyphs
        ],
        dropped=[DroppedChar(index=index, char=char) for index, char in curved.dropped],
    )


@app.post("/layout/scene")
async def scene_endpoint(request: CurveRequest) -> dict:
    """Lay text out along an arc and return the scene description."""
    curved = _curve(request, "layout_scene")
    return to_scene(curved)


@app.post(
    "/layout/svg",
    response_class=Response,
    responses={
        200: {
            "content": {"image/svg+xml": {}},
            "description": "Top-down SVG preview",
        },
        422: {"description": "Invalid input"},
    },
)
async def layout_svg(request: CurveRequest) -> Response:
    """Render a top-down SVG preview of the curved text."""
    curved = _curve(request, "layout_svg")
    try:
        svg_content = render_svg(curved, request.size, request.colors)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("render_svg_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Rendering failed")

    return Response(content=svg_content, media_type="image/svg+xml")


@app.post(
    "/layout/png",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "Top-down PNG preview"},
        422: {"description": "Invalid input"},
    },
)
async def layout_png(request: CurveRequest) -> Response:
    """Render a top-down PNG preview of the curved text."""
    curved = _curve(request, "layout_png")
    try:
        png_bytes = render_png(curved, request.size, request.colors)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("render_png_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Rendering failed")

    return Response(content=png_bytes, media_type="image/png")


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for Docker and load balancer probes."""
    return HealthResponse(
        status="healthy",
        service="textarc",
        version=VERSION,
    )
