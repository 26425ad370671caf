from setuptools import setup, find_packages

setup(
    name="exactlin",
    version="1.0",
    description="Exact rational linear algebra and polynomial interpolation",
    long_description=("Exact rational linear algebra on fractions of 64-bit integers: Gaussian elimination, "
                      "reduced row echelon form, determinants, inverses and exact polynomial interpolation"),
    long_description_content_type="text/plain",
    license="Apache License 2.0",
    python_requires=">=3.7",
    packages=find_packages(include=["exactlin", "exactlin.*"]),
    install_requires=["numpy", "scipy"],
    extras_require={"test": ["pytest", "pytest-timeout"]},
    classifiers=[
        "Intended Audience :: Science/Research", "Development Status :: 3 - Alpha", "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10", "Programming Language :: Python :: 3.11", "Programming Language :: Python :: 3.12",
        "Natural Language :: English", "Operating System :: OS Independent", "Topic :: Scientific/Engineering :: Mathematics"
    ],
    keywords=["rational arithmetic", "gaussian elimination", "exact linear algebra", "polynomial interpolation"],
    zip_safe=False,
)
