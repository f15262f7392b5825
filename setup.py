from setuptools import setup, find_packages
from pathlib import Path

setup(
    name="yolo_annotation",
    version=Path("./yolo_annotation/VERSION").read_text().strip(),
    description="Interactive bounding box annotation in the normalized YOLO label format",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"yolo_annotation": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "opencv-python",
        "easydict",
        "matplotlib",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["yolo_annotation=yolo_annotation.cli:main"],
    },
)
