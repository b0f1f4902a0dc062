from setuptools import setup, find_packages

setup(
    name="button-commands",
    version="2.2.0",
    description="Run commands when an electric button is pressed.",
    packages=find_packages(exclude=("tests", "tests.*", "examples", "examples.*")),
    install_requires=[],
    extras_require={
        "dev": ["pytest", "black", "isort"],
    },
    entry_points={
        "console_scripts": [
            "button-commands=button_commands.cli:main",
        ],
    },
    python_requires=">=3.10",
)
