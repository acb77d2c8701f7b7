from __future__ import annotations

from setuptools import find_packages, setup

setup(
    name="heykids-watch-this",
    version="0.1.0",
    # Repo convention: library code lives under `backend/`, imported as `heykids`.
    package_dir={"": "backend"},
    packages=find_packages(where="backend", include=["heykids", "heykids.*"]),
    # The seed catalog ships inside the package.
    package_data={"heykids.infrastructure.catalog": ["movies.yaml"]},
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.10",
        "pyyaml>=6.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        # Tests are plain unittest; pytest is an optional runner.
        "test": ["pytest>=8.0"],
    },
)
