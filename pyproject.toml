[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tflsp"
version = "0.1.0"
description = "Building blocks for a Terraform language server: HCL helpers, semantic token encoding and LSP conversions"
requires-python = ">=3.10"
dependencies = []
keywords = ["terraform", "hcl", "lsp", "language-server", "semantic-tokens"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors :: Integrated Development Environments (IDE)",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tflsp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
