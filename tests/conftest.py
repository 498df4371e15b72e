"""Shared pytest setup for tickletimer tests."""

import os
import tempfile

# Paths are resolved when tickletimer.common.setup is first imported, so this must run before any test module
# imports the package.
os.environ["TICKLETIMER_HOME"] = tempfile.mkdtemp(prefix="tickletimer-tests-")
