from setuptools import find_packages, setup

# Physical structure matches import path: packages/jerseyswap/{core,cli}
packages = find_packages(where="packages", include=["jerseyswap", "jerseyswap.*"])

setup(
    name="jerseyswap",
    version="0.1.0",
    description="Replace a player's jersey and background using an image generation model",
    python_requires=">=3.11",
    packages=packages,
    package_dir={"": "packages"},
    install_requires=[
        "google-genai>=1.0",
        "openai>=1.76",
        "pillow>=10.0",
        "pydantic>=2.5",
        "pyyaml>=6.0",
        "rich>=13.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "jerseyswap=jerseyswap.cli.main:main",
        ],
    },
)
