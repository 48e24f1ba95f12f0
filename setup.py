from setuptools import find_packages, setup

setup(
    name="restplate",
    version="1.0.0",
    description="Relaxed RFC 6570 templates for building HTTP requests",
    author="GAHEOS",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages("src"),
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["restplate=restplate.cli:main"]},
)
