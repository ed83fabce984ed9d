"""
Profile merge rules.

Every profile write (upload refresh, deletion refresh, manual edit) goes
through these functions instead of overwriting the stored profile.

Dependencies: draftsmith.core.profile.schema
System role: Field-level profile merging
"""

from draftsmith.core.profile.schema import MERGEABLE_FIELDS, Profile


def merge(existing: Profile | None, incoming: Profile) -> Profile:
    """
    Merge a partial update into the stored profile.

    A field is taken from `incoming` only if the payload explicitly carried
    it (an empty string or list counts). raw_text is never taken from
    `incoming`.

    Args:
        existing: Stored profile, or None if the user has none yet
        incoming: Partial update; its model_fields_set marks present fields

    Returns:
        Profile: New merged profile (inputs are not modified)
    """
    base = existing or Profile()
    present = incoming.model_fields_set & set(MERGEABLE_FIELDS)
    updates = {name: getattr(incoming, name) for name in present}
    return base.model_copy(update=updates, deep=True)


def merge_extracted(existing: Profile | None, extracted: Profile, raw_text: str) -> Profile:
    """
    Merge a freshly extracted profile into the stored profile.

    Only non-empty extracted fields count as present, so a field the model
    could not find keeps its stored value. raw_text is replaced by the
    corpus the extraction ran on.

    Args:
        existing: Stored profile, or None
        extracted: Profile decoded from the extraction model output
        raw_text: Document corpus used for extraction

    Returns:
        Profile: New merged profile
    """
    base = existing or Profile()
    updates = {
        name: getattr(extracted, name)
        for name in MERGEABLE_FIELDS
        if getattr(extracted, name)
    }
    updates["raw_text"] = raw_text
    return base.model_copy(update=updates, deep=True)
