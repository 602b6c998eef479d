from setuptools import setup, find_packages

setup(
    name="turbod-client",
    version="0.1.0",
    description="Locate and connect to the per-repository turbo build daemon",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*", "scripts"]),
    install_requires=[
        "platformdirs>=3.0",
        "python-dotenv>=1.0.0",
        "typer>=0.9",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "turbod=turbod.main:turbod",
        ],
    },
    python_requires=">=3.10",
)
