import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="subsmoor",
    version="0.1.0",
    author="Trevor Mackessy-Lloyd",
    description="Static equilibrium of subsurface moorings in a current",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=['subsmoor',
              'subsmoor.elements',
              'subsmoor.mooring'],
    package_data={'subsmoor.elements':['ElementProps_default.yaml']},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.7',
    install_requires=[
        "numpy",
        "matplotlib",
        "pyyaml"
    ],
    extras_require={
        "test": ["pytest"],
    },
)
