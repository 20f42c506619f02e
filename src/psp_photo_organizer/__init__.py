"""PSP Photo Organizer -- convert, rename and timestamp images for PSP viewing.

Core modules:
    config    -- Frozen organizer configuration via pydantic-settings (PSP_* env
                 vars). CLI flags passed as kwargs to OrganizerConfig.
    cli       -- Click entry point (psp-organize): copy-only pipeline.
    cli_timestamps -- Click entry point (psp-timestamps): in-place minute
                 increment timestamps for an existing folder.
    runner    -- Per-directory and batch (per-subdirectory) stage orchestration.
    ordering  -- Natural filename ordering, image discovery, subdirectory listing.
    naming    -- Output names (001.jpg / IMG_001.jpg) and work-dir staging names.
    imaging   -- ImageMagick subprocess wrapper. convert() returns JPEG bytes or
                 Unavailable, never raises for a missing binary.
    models    -- Enums, extension sets, TimestampCursor, result dataclasses.

Subpackages:
    stages    -- Pipeline stages (scan, convert, organize, timestamp)
"""
