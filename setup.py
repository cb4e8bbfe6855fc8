from setuptools import setup, find_packages

setup(
    name="midi_bridge",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
        "python-multipart>=0.0.6",
        "pydantic>=1.8.0",
        "pretty-midi>=0.2.10",
        "pyyaml>=6.0.2",
        "rich>=13.0.0",
    ],
    extras_require={
        "examples": [
            "requests>=2.28.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "httpx>=0.24.0",
        ],
    },
    python_requires=">=3.9",
)
