"""Stage registry -- maps Stage enum values to run functions.

Pipeline order: scan -> convert -> organize -> timestamp

Every stage takes the ordered file list produced by the previous stage and
returns the ordered list the next stage works on, so position in the list is
the only ordering state that flows through the pipeline.

Stages:
    scan -- List qualifying image files directly in the source directory in
            natural filename order. JPEGs always qualify; PNG/WebP/GIF/BMP
            only when conversion is enabled. Hidden files are ignored.
    convert -- Hand each file to the converter (ImageMagick by default) for
               JPEG output at the configured quality with 4:2:0 chroma
               subsampling. Output is staged in a temp work dir under
               index-prefixed names. When the converter is unavailable or
               fails, JPEGs fall through as plain copies and other formats are
               skipped with a warning. With preserve_dates, staged files carry
               the source timestamps.
    organize -- Copy files into the target directory as 001.jpg (comic mode)
                or IMG_001.jpg (photo mode). Counter advances only on a
                successful copy so names stay gapless. copy2 with
                preserve_dates, plain copy otherwise. Creates the target dir
                lazily; an unusable target is a ConfigError.
    timestamp -- Give file i the mtime start + i minutes with full carry
                 (minute -> hour -> day -> month -> year). Per-file failures
                 are warnings; the cursor still advances.
"""

from ..models import Stage


def get_stage_runner(stage: Stage):
    """Return the run function for a given stage."""
    if stage == Stage.SCAN:
        from .scan import run as scan_run

        return scan_run

    if stage == Stage.CONVERT:
        from .convert import run as convert_run

        return convert_run

    if stage == Stage.ORGANIZE:
        from .organize import run as organize_run

        return organize_run

    if stage == Stage.TIMESTAMP:
        from .timestamp import run as timestamp_run

        return timestamp_run

    raise NotImplementedError(f"Stage '{stage.value}' is not implemented.")
