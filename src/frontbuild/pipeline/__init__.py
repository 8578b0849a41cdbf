"""Pipeline orchestration layer.

- `pipeline/assets.py` - one generic runner driving every asset category
- `pipeline/clean.py` - removal of the output tree
- `pipeline/build.py` - the fixed build and start sequences

Import policy:
- CLI and server import only from `pipeline.*` for orchestration.
- `pipeline.*` may call `transforms.*` as adapters.
- `transforms.*` must not call `pipeline.*`.
"""
