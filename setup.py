from setuptools import setup, find_packages
from pathlib import Path

# Read README.md if available (for development installs)
# For wheel builds, use a fallback description
readme_path = Path(__file__).parent / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")
else:
    long_description = "Runtime parameter descriptors: declare the shape of data, then validate, normalize and cast values against it."

setup(
    name="typedparams",
    version="0.3.0",
    author="Fabricio Ceolin",
    author_email="fabceolin@gmail.com",
    description="Runtime parameter descriptors for validating arguments, payloads and return values",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0.0",  # Settings models
        "jsonschema>=4.20.0",  # Declaration document checks
    ],
    extras_require={
        "dev": [
            "pytest",
            "coverage",
            "hypothesis",
            "parameterized==0.9.0",
        ],
    },
)
