"""Deterministic prompt builder for generation requests.

Assembles instruction text from a tagged operation.
NO randomness, NO timestamps - identical inputs give byte-identical text.
"""

from __future__ import annotations

from collections.abc import Iterable

from jerseyswap.core.prompts.models import (
    NEGATIVE_CONSTRAINT_OPTIONS,
    BackgroundReplaceOperation,
    JerseySwapOperation,
    JerseyType,
)

# ----------------------------------------------------------------------------
# Jersey swap sections
# ----------------------------------------------------------------------------

_SWAP_FRAMING = """**CRITICAL TASK: PHOTOREALISTIC JERSEY REPLACEMENT**

You are a specialist AI for hyper-realistic apparel visualization. Your task is to take a jersey design (Image B) and make a football player (Image A) appear to be naturally wearing it. The result must be photorealistic and indistinguishable from a real photo."""

_SWAP_INPUTS = """**INPUTS:**
- **Image A (Player Photo):** The target image.
- **Image B (Jersey Design):** The source texture.
- **Jersey Type:** {jersey_type}"""

_SWAP_MASKING = """**MANDATORY WORKFLOW:**

1.  **Jersey Area Identification (Masking):**
    *   Analyze Image A and identify the **entire area** of the jersey currently worn by the player.
    *   This is not a rectangle. The area must precisely follow the contours of the player's body: torso, shoulders, arms, sleeves, and collar. Create a perfect mask of this shape."""

_SWAP_TEXTURE = """2.  **Texture Mapping & Warping:**
    *   Treat Image B as a flat texture.
    *   Map and warp this texture onto the masked area of the player. The texture must bend, stretch, and deform naturally with the player's pose and the folds of the fabric."""

_CUSTOM_DESIGN_FIDELITY = """3.  **Fidelity & Detail Transfer:**
    *   **LITERAL REPLICATION:** You must transfer every single detail from Image B to the player. This design is a unique concept and must be treated as the absolute source of truth. This includes:
        *   The exact manufacturer logo.
        *   The exact team crest.
        *   The exact sponsor logo.
        *   The precise colors.
        *   Any subtle patterns or textures in the fabric.
    *   **DO NOT** use your existing knowledge of team jerseys. Replacing the custom design with a different one from your knowledge is a critical failure."""

_OFFICIAL_JERSEY_FIDELITY = """3.  **Fidelity & Detail Transfer:**
    *   **PERFECT REPLICATION:** You must transfer every single detail from Image B to the player with 100% accuracy. Even though this is an official jersey, the provided image (Image B) is the source of truth for this specific task. Replicate its details exactly, including:
        *   The specific version of the manufacturer logo.
        *   The specific version of the team crest.
        *   The exact sponsor logos and any sleeve patches visible in Image B.
        *   The precise colors and fabric texture from Image B.
    *   **DO NOT** use a generic or different season's version of this jersey from your knowledge base. The goal is to perfectly recreate the jersey shown in Image B on the player in Image A."""

_FIDELITY_CLAUSES: dict[JerseyType, str] = {
    JerseyType.CUSTOM_DESIGN: _CUSTOM_DESIGN_FIDELITY,
    JerseyType.OFFICIAL_JERSEY: _OFFICIAL_JERSEY_FIDELITY,
}

_SWAP_LIGHTING = """4.  **Photorealistic Integration (Lighting & Shadows):**
    *   Analyze the lighting (direction, softness, color) in Image A.
    *   Re-apply these lighting conditions to the new jersey.
    *   Re-create the original shadows and fabric folds from Image A onto the new jersey texture to give it volume and realism.
    *   Ensure all other parts of Image A (player's skin, shorts, background) remain completely untouched."""

_SWAP_FAILURES = """**FAILURE CONDITIONS (WHAT TO AVOID):**
-   Pasting a flat, rectangular patch of the jersey image.
-   The new jersey looking like a sticker or an overlay.
-   Ignoring the player's body shape.
-   Using a different jersey (official or otherwise) from your knowledge base.
-   Mismatched lighting or shadows."""

_USER_CONSTRAINTS = """**USER-DEFINED CONSTRAINTS TO AVOID:**
- {constraints}"""

_SWAP_OUTPUT = "**OUTPUT:** The final, edited image ONLY. No text."

# ----------------------------------------------------------------------------
# Background replace sections
# ----------------------------------------------------------------------------

_BACKGROUND_FRAMING = """You are a master-level visual effects compositor with an obsessive eye for photorealism. Your mission is to take a player from a source image and flawlessly integrate them into a new background scene. The final result must be indistinguishable from a single, original photograph."""

_BACKGROUND_INPUTS = """**Source Images:**
- **Player Image:** This is the first image provided. It contains the player you need to extract.
- **Background Image:** This is the second image provided. It is the new scene where the player will be placed.

**Core Objective:** Absolute, undeniable realism. Eradicate any hint of artificiality."""

_BACKGROUND_ANALYZE = """**MANDATORY EXECUTION WORKFLOW:**

1.  **Analyze the Background Image:**
    *   **Lighting Analysis:** Identify the key light source(s). Determine their direction, color temperature (warm/cool), intensity, and quality (hard light with sharp shadows, or soft/diffuse light with gentle shadows). Note any ambient or bounce light.
    *   **Perspective Analysis:** Analyze the perspective lines and vanishing points of the scene. Understand the camera's approximate focal length and angle to establish the scene's scale."""

_BACKGROUND_PLACEMENT = """2.  **Prepare the Background Image:**
    *   **Identify Placement Zone:** Determine the most logical position in the background for the player to stand.
    *   **Conditional Removal:** Examine the placement zone. If there is a player who is **in direct conflict** with the new player's position, you will remove them ONLY IF they appear to be a teammate (similar jersey). Flawlessly reconstruct the background behind them.
    *   **Strict Preservation Rule:** You MUST PRESERVE players in the background who are:
        *   Wearing an opponent's jersey (different colors/design).
        *   Significantly out of focus or far in the distance.
        *   Teammates who are not in the direct placement zone."""

_BACKGROUND_EXTRACT = """3.  **Extract and Integrate the Player:**
    *   From the **Player Image**, perfectly isolate the main player, including their entire body and uniform.
    *   Place the isolated player into the identified zone in the **Background Image**.
    *   **CRITICAL SCALING:** You MUST scale the player to be proportionally correct within the scene's perspective. They must not look too big or too small. Their feet must align perfectly with the ground plane. This step is crucial and must be executed with precision."""

_BACKGROUND_LIGHTING = """4.  **Master-Level Lighting and Shadow Synthesis:**
    *   **Re-Lighting:** Based on your light analysis, re-light the player. Add highlights (specular and diffuse) that match the new light source's direction and quality.
    *   **Shadow Casting - Non-Negotiable:** Create new shadows that are physically and contextually perfect. This involves two parts:
        *   **Contact Shadows:** Create subtle, dark, soft shadows where the player's feet make contact with the ground. This anchors them to the scene.
        *   **Cast Shadow:** Render the main shadow cast by the player's body. This shadow's **direction** must perfectly oppose the key light source. Its **softness/sharpness** (penumbra) must exactly match the shadows of other objects in the background. Its **color and density** must also match. A blurry, dark blob is an instant failure. The shadow must be a realistic projection of the player's form."""

_BACKGROUND_OUTPUT = "**Final Output:** Produce only the final, perfectly composited image. No text. The result should withstand professional scrutiny."

_IMAGE_ROLES: dict[str, tuple[str, ...]] = {
    "jersey_swap": ("player", "jersey"),
    "background_replace": ("player", "background"),
}


def join_negative_constraints(constraints: Iterable[str]) -> str:
    """Join selected constraints into a comma-separated clause.

    Output follows NEGATIVE_CONSTRAINT_OPTIONS order so the result does not
    depend on selection order. Values outside the canonical list are dropped.

    Args:
        constraints: Selected negative constraints.

    Returns:
        Comma-separated string, empty if nothing is selected.

    Example:
        >>> join_negative_constraints({"blurry", "rectangular patch"})
        'rectangular patch, blurry'
    """
    selected = set(constraints)
    return ", ".join(option for option in NEGATIVE_CONSTRAINT_OPTIONS if option in selected)


def fidelity_clause(jersey_type: JerseyType) -> str:
    """Return the fidelity section for a jersey type."""
    return _FIDELITY_CLAUSES[jersey_type]


def image_roles(operation: JerseySwapOperation | BackgroundReplaceOperation) -> tuple[str, ...]:
    """Ordered image roles an operation expects alongside its instruction text."""
    return _IMAGE_ROLES[operation.kind]


def _build_jersey_swap(operation: JerseySwapOperation) -> str:
    sections = [
        _SWAP_FRAMING,
        _SWAP_INPUTS.format(jersey_type=operation.jersey_type.value),
        _SWAP_MASKING,
        _SWAP_TEXTURE,
        fidelity_clause(operation.jersey_type),
        _SWAP_LIGHTING,
        _SWAP_FAILURES,
    ]

    joined = join_negative_constraints(operation.negative_constraints)
    if joined:
        sections.append(_USER_CONSTRAINTS.format(constraints=joined))

    sections.append(_SWAP_OUTPUT)
    return "\n\n".join(sections)


def _build_background_replace(operation: BackgroundReplaceOperation) -> str:
    return "\n\n".join(
        [
            _BACKGROUND_FRAMING,
            _BACKGROUND_INPUTS,
            _BACKGROUND_ANALYZE,
            _BACKGROUND_PLACEMENT,
            _BACKGROUND_EXTRACT,
            _BACKGROUND_LIGHTING,
            _BACKGROUND_OUTPUT,
        ]
    )


def build_prompt(operation: JerseySwapOperation | BackgroundReplaceOperation) -> str:
    """Build the instruction text for an operation (deterministic).

    Jersey swap sections, in order:
    1. task framing
    2. input roles (Image A = player, Image B = jersey) and jersey type
    3. masking along body contours
    4. texture mapping & warping
    5. fidelity clause selected by jersey type
    6. lighting & shadow re-application
    7. failure conditions, plus user-defined constraints when any are selected
    8. image-only output instruction

    Background replace has a fixed structure: framing, the two input roles,
    a four-step procedure and the image-only output instruction.

    Args:
        operation: JerseySwapOperation or BackgroundReplaceOperation.

    Returns:
        Instruction text.

    Raises:
        TypeError: If the operation variant is not recognised.
    """
    if isinstance(operation, JerseySwapOperation):
        return _build_jersey_swap(operation)
    if isinstance(operation, BackgroundReplaceOperation):
        return _build_background_replace(operation)
    raise TypeError(f"Unsupported prompt operation: {type(operation).__name__}")
