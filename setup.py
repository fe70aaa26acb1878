import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="ocsf_codegen",
    version="1.0.0",
    description="Generate typed, serializable Python dataclasses from OCSF schema documents",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Security",
        "Intended Audience :: Developers",
    ],
    keywords="ocsf cybersecurity schema code generation python dataclass enum",
    license="MIT",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    python_requires=">=3.12",
    install_requires=[
        "click>=8.0.0",
        "jinja2>=3.0.0",
        # Runtime dependencies of the generated modules
        "dataclasses-json>=0.6.0",
        "typing-extensions>=4.5.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ocsf_codegen=ocsf_codegen.ocsf_codegen:ocsf_codegen",
        ],
    },
    include_package_data=True,
    package_data={
        "ocsf_codegen": ["templates/**/*.jinja2"],
    },
    zip_safe=False,
)
