from typing import Sequence

from setuptools import find_packages, setup


def get_requirements() -> Sequence[str]:
    with open("requirements.txt") as fp:
        return [
            x.strip() for x in fp if x.strip() and not x.startswith("#")
        ]


setup(
    name="expect-changes",
    version="1.0.0",
    license="Apache-2.0",
    description="Before/after and compound change expectations for Python tests.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "examples"]),
    package_data={"expect_changes": ["py.typed"]},
    zip_safe=False,
    python_requires=">=3.8",
    install_requires=get_requirements(),
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Framework :: Pytest",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Topic :: Software Development :: Testing",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
        "docs": [
            "sphinx>=5.0",
            "sphinx-rtd-theme>=1.0",
            "sphinx-autodoc-typehints>=1.19",
        ],
    },
)
