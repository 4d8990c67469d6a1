from setuptools import setup, find_namespace_packages

setup(
    name="snapshoot",
    version="0.1.0",
    description="Swipe-to-shoot football shot pipeline with a headless mock game loop",
    author="SnapShoot",
    packages=find_namespace_packages(include=["snapshoot*"]),
    python_requires=">=3.11",
    install_requires=[
        "PyQt6>=6.6.0",
        "numpy>=1.26.0",
        "scipy>=1.12.0",
    ],
    extras_require={
        "test": ["pytest>=8.0.0", "pytest-qt>=4.4.0"],
    },
    entry_points={
        "console_scripts": [
            "snapshoot=snapshoot.main:main",
        ],
    },
)
