from setuptools import setup, find_packages

setup(
    name="liveline",
    version="0.1.0",
    description="Editable, diff-rendered terminal lines for live status output",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    install_requires=[
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    python_requires=">=3.9",
)
