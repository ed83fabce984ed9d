"""
Plain-text rendering of a profile for generation prompts.

Dependencies: draftsmith.core.profile.schema
System role: Prompt context formatting
"""

from draftsmith.core.profile.schema import Profile

SPARSE_PROFILE_CHARS = 500
RAW_TEXT_SUPPLEMENT_CHARS = 8000


def format_profile(profile: Profile) -> str:
    """
    Render labelled profile lines, omitting empty fields.

    Args:
        profile: Profile to render

    Returns:
        str: Multi-line text block
    """
    lines: list[str] = []

    for label, value in (
        ("Name", profile.full_name),
        ("Email", profile.email),
        ("Phone", profile.phone),
        ("Location", profile.location),
        ("LinkedIn", profile.linkedin),
    ):
        if value:
            lines.append(f"{label}: {value}")

    if profile.summary:
        lines += ["", "Professional Summary:", profile.summary]

    if profile.skills:
        lines += ["", f"Skills: {', '.join(profile.skills)}"]

    if profile.experience:
        lines += ["", "Work Experience:"]
        for exp in profile.experience:
            lines.append(f"- {exp.title} at {exp.company} ({exp.duration})")
            if exp.description:
                lines.append(f"  {exp.description}")

    if profile.education:
        lines += ["", "Education:"]
        lines += [
            f"- {edu.degree} from {edu.institution} ({edu.year})"
            for edu in profile.education
        ]

    if profile.certifications:
        lines += ["", f"Certifications: {', '.join(profile.certifications)}"]

    if profile.projects:
        lines += ["", "Projects:"]
        for proj in profile.projects:
            line = f"- {proj.name}: {proj.description}"
            if proj.technologies:
                line += f" [{', '.join(proj.technologies)}]"
            lines.append(line)

    if profile.achievements:
        lines += ["", "Achievements:"]
        lines += [f"- {item}" for item in profile.achievements]

    return "\n".join(lines) + "\n" if lines else ""


def format_profile_for_prompt(profile: Profile) -> str:
    """
    Render a profile, topping up sparse renderings with raw document text.

    When the labelled rendering is shorter than 500 characters, up to 8000
    characters of raw_text are appended.
    """
    formatted = format_profile(profile)
    if profile.raw_text and len(formatted) < SPARSE_PROFILE_CHARS:
        formatted += (
            "\nAdditional raw text:\n"
            f"{profile.raw_text[:RAW_TEXT_SUPPLEMENT_CHARS]}\n"
        )
    return formatted
