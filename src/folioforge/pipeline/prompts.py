"""Prompt construction for portfolio content generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from folioforge.models.enums import TemplateName

if TYPE_CHECKING:
    from folioforge.backend.base import GenerationRequest

# ---------------------------------------------------------------------------
# Writing style guides per template.
# ---------------------------------------------------------------------------
STYLE_GUIDES: dict[TemplateName, str] = {
    TemplateName.MODERN: """\
Style Guide: Modern
- Use a contemporary, tech-forward writing style
- Emphasize innovation and cutting-edge approaches
- Use clean, concise language with technical focus
- Highlight relevance to current industry trends
- Present skills in a forward-thinking manner
- Describe projects with focus on modern technologies and innovative solutions
- Overall tone should be professional, confident and forward-looking""",
    TemplateName.MINIMAL: """\
Style Guide: Minimal
- Use simple, streamlined writing with short sentences
- Focus on essential information only, avoid fluff or excessive detail
- Employ minimalist phrasing that highlights core value
- Use straightforward, unpretentious language
- Organize content in a clean, uncluttered way
- List skills concisely with focus on expertise level
- Describe projects in brief, impactful statements
- Overall tone should be clean, calm, and efficient""",
    TemplateName.ELEGANT: """\
Style Guide: Elegant
- Use sophisticated, refined language with a touch of formality
- Employ graceful phrasing and well-structured sentences
- Focus on quality and craftsmanship in work descriptions
- Highlight attention to detail and refined approach
- Present skills with emphasis on mastery and excellence
- Describe projects with focus on their sophistication and polished nature
- Overall tone should be cultivated, articulate and distinguished""",
}

DEFAULT_STYLE_GUIDE = """\
Style Guide: Professional
- Use clear, professional language
- Balance between detailed and concise information
- Present skills and experience in a straightforward manner
- Describe projects with focus on outcomes and value
- Overall tone should be professional and approachable"""

FORMAT_INSTRUCTIONS = """\
Please format the portfolio as valid HTML that is clean and beautifully designed.
Include appropriate styling and utilize the provided information effectively.
If social links are provided, please include them with appropriate icons.
If a profile image is mentioned, please reference it in the design (assume the image exists).
Make sure the HTML is semantically correct and uses appropriate heading levels."""


def style_guide(template_style: str | None) -> str:
    """Return the style guide for a template name; unknown names get the default."""
    try:
        return STYLE_GUIDES[TemplateName(template_style)]
    except ValueError:
        return DEFAULT_STYLE_GUIDE


def build_generation_prompt(request: GenerationRequest) -> str:
    """Build the single user prompt sent to the text-generation model."""
    extras = ""
    if request.social_links:
        links = ", ".join(f"{link.platform} ({link.url})" for link in request.social_links)
        extras += f"\nSocial Links: {links}"
    if request.profile_image:
        extras += "\nUser has uploaded a profile picture to use in the portfolio."

    return (
        "Generate a professional HTML portfolio section for the following user, "
        "following the specific style guide below.\n"
        f"Name: {request.name}\n"
        f"Bio: {request.bio}\n"
        f"Skills: {request.skills}\n"
        f"Projects: {request.projects}{extras}\n\n"
        f"{style_guide(request.template_style)}\n\n"
        f"{FORMAT_INSTRUCTIONS}"
    )
