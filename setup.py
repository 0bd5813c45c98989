from setuptools import setup, find_packages

setup(
   name="smartptr",
   version="0.1.0",
   python_requires=">=3.12",
   packages=find_packages(exclude=["tests", "tests.*"]),
   install_requires=[],
   extras_require={
      "test": [
         "pytest",
      ],
   },
   entry_points={
       "console_scripts": [
           "smartptr = smartptr.cli:main"
       ]
   },
)
