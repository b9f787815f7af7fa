import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="chestgui",
    version="0.1.0",
    author="chestgui contributors",
    description="Chest GUI offset editor and chest.json generator for Bedrock JSON UI.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=setuptools.find_packages(exclude=["tests", "tests.*", "examples"]),
    python_requires=">=3.10",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "numpy>=1.21",
        "opencv-python>=4.5",
        "black>=23.1",
        "pydantic>=2.0",
        "flake8>=6.0",
        "typer>=0.9",
        "PySide6==6.8.3",
        "loguru",
    ],
    entry_points={
        "console_scripts": [
            "chestgui=chestgui.cli:main",
        ],
    },
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
)
