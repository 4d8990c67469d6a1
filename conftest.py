import os

# Qt needs a platform plugin even for QCoreApplication-only tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
