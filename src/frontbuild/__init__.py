"""
frontbuild core package.

This package provides:
- A declarative table of asset categories (`frontbuild.paths`)
- Thin adapters around external compilers, minifiers and optimizers
  (`frontbuild.transforms`)
- Per-category pipelines and the fixed build/start sequences
  (`frontbuild.pipeline`)
- A livereload-backed file watcher and dev server (`frontbuild.server`)
- A Typer-based CLI (`frontbuild.cli`)

Configuration:
- Shared filesystem anchors and server constants live in
  `frontbuild.global_config`.
"""
