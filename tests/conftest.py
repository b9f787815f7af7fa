import os

# Qt widgets are created without a display in tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
