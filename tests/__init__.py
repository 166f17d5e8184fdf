"""
Tests for ECM Creator

This package contains validation tests for:
- Ellipse geometry and voxel grids
- Fiber orientation solvers
- Patch resolution and layer compositing
- XML parsing, rotation expressions and templates
- End-to-end CSV generation and the CLI
"""
