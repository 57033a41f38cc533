"""Path template inference -- turn concrete request paths back into route templates.

* :mod:`~apidox.inference.path_template` -- :func:`infer_path_template` and
  the :func:`build_action` factory used by the recorder.
"""

from apidox.inference.path_template import build_action, guess_param_type, infer_path_template

__all__ = ["build_action", "guess_param_type", "infer_path_template"]
