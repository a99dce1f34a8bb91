#!/usr/bin/env python

from setuptools import setup

setup(
    name="galleryfolders",
    version="0.1.0",
    description="API for browsing an object-store image gallery as a folder tree",
    packages=["galleryfolders", "galleryfolders.api", "galleryfolders.objectstorage"],
    include_package_data=True,
    zip_safe=False,
    keywords=["API", "gallery", "S3"],
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Topic :: Multimedia :: Graphics",
    ],
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "pydantic>=2",
        "pydantic-settings",
        "python-dotenv",
        "uvicorn",
        "aiobotocore",
        "types-aiobotocore-s3",
        "async-lru",
        "peewee",
        "typing-extensions",
    ],
    extras_require={
        'dev': [
            'pytest',
            'anyio',
            'httpx',
            'mypy',
            'flake8',
        ]
    },
    entry_points={
        'console_scripts': [
            'galleryfolders = galleryfolders.__main__:main'
        ]
    },
)
