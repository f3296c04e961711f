"""Setup script for tmux-ai-status."""

from pathlib import Path

from setuptools import find_packages, setup

# Read requirements from requirements.txt
requirements_file = Path(__file__).parent / "requirements.txt"
with open(requirements_file, encoding="utf-8") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

# Read version from tmux_ai_status/__version__.py
version_file = Path(__file__).parent / "tmux_ai_status" / "__version__.py"
version = {}
with open(version_file, encoding="utf-8") as f:
    exec(f.read(), version)

# Read long description from README
readme_file = Path(__file__).parent / "README.md"
with open(readme_file, encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="tmux-ai-status",
    version=version["__version__"],
    description="Label tmux windows with what the Claude or Codex agent inside them is doing",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    extras_require={"test": ["pytest>=8.0"]},
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "tmux-ai-status=tmux_ai_status.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Terminals :: Terminal Emulators/X Terminals",
        "Topic :: Utilities",
    ],
    keywords="tmux claude codex agent status window monitor",
)
