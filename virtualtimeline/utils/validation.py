"""Validation utilities for annotation snapshots."""

from __future__ import annotations

from virtualtimeline.core.models import ValidationResult, VideoDataPayload


class ValidationUtils:
    """Soft checks on data handed over by the annotation store.

    Hard constraints (types, unique ids, finite numbers) are enforced by the
    models themselves; these checks report data the engine will accept but
    quietly reinterpret.
    """

    @staticmethod
    def validate_payload(
        payload: VideoDataPayload, real_duration: float | None = None
    ) -> ValidationResult:
        """Report unknown tag references and out-of-range segments."""
        result = ValidationResult(is_valid=True)
        tags = payload.tag_map()

        for segment in payload.segments:
            if segment.tag_id not in tags:
                result.add_warning(
                    f"Segment {segment.id} references unknown tag "
                    f"{segment.tag_id}; it will be treated as visible"
                )
            if segment.end_real < segment.start_real:
                result.add_warning(
                    f"Segment {segment.id} has inverted endpoints "
                    f"({segment.start_real} > {segment.end_real})"
                )
            if segment.duration == 0:
                result.add_warning(f"Segment {segment.id} has zero length")
            if segment.start < 0:
                result.add_warning(f"Segment {segment.id} starts before 0")
            if real_duration is not None and segment.end > real_duration:
                result.add_warning(
                    f"Segment {segment.id} ends after the recording "
                    f"({segment.end} > {real_duration})"
                )

        used = {segment.tag_id for segment in payload.segments}
        for tag in payload.tags:
            if tag.id not in used:
                result.add_warning(f"Tag {tag.id} has no segments")

        if real_duration is not None and real_duration < 0:
            result.add_error(f"Negative real duration: {real_duration}")

        return result
