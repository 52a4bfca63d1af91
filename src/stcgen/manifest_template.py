"""The stc.yaml template the model fills in for every directory."""

MANIFEST_TEMPLATE = """\
name: {{project_name}}
description: {{project_description}}
version: {{version}}  # semantic versioning
status: {{status}}

# Structure
directories:  # when the directory has subdirectories
  - name: /{{directory_name}}
    description: {{directory_description}}
    status: {{status}}
    directories:  # nested subdirectories, as needed
      - name: /{{subdirectory_name}}
        description: {{subdirectory_description}}
        status: {{status}}

files:  # files directly in this directory
  - {{filename}}:
      description: {{file_description}}
      status: {{status}}
      exports:  # exported types and functions (optional)
        - {{export_name}}: {{export_description}}
      functions:  # function definitions (optional)
        - name: {{function_name}}
          description: {{function_description}}
          params:
            - name: {{param_name}}
              type: {{param_type}}
              description: {{param_description}}
          return:
            type: {{return_type}}
            description: {{return_description}}
      types:  # type definitions (optional)
        - {{type_name}}: {{type_description}}
      constants:  # constant definitions (optional)
        - {{constant_name}}: {{constant_description}}

# Modules (optional)
modules:
  {{module_name}}:
    description: {{module_description}}
    status: {{status}}
    platform: {{platform_name}}  # when platform specific
    functions:
      - {{function_name}}
    types:
      - {{type_name}}
    platform_specific:  # platform specific definitions
      - {{platform_specific_item}}

# Dependencies
dependencies:
  internal:  # other stc.yaml manifests this directory relies on
    - path: {{relative_path_to_stc_yaml}}  # e.g. ../core/stc.yaml
      name: {{component_name}}  # e.g. app-core
      version: {{version_requirement}}  # e.g. ^0.1.0
      description: {{dependency_description}}
      child_structures:  # manifests of child directories
        - path: {{child_directory}}/stc.yaml
          description: {{child_component_description}}
  external:  # third-party libraries
    required:
      - name: {{dependency_name}}
        version: {{version_requirement}}
        description: {{dependency_description}}
    optional:
      - name: {{dependency_name}}
        version: {{version_requirement}}
        description: {{dependency_description}}
        features:  # features that need this dependency
          - {{feature_name}}

# Features
features:
  - {{feature_name}}: {{feature_description}}

# Platform support
platforms:
  - {{platform_name}}: {{platform_requirements}}

# Optional sections below
api_endpoints:  # when the code exposes API endpoints
  - path: {{endpoint_path}}
    method: {{http_method}}
    description: {{endpoint_description}}
    params:
      - name: {{param_name}}
        type: {{param_type}}
        required: {{required}}
        description: {{param_description}}

database_schemas:  # when the code defines database schemas
  - table: {{table_name}}
    description: {{table_description}}
    columns:
      - name: {{column_name}}
        type: {{column_type}}
        constraints: {{constraints}}
        description: {{column_description}}

configurations:  # when the code reads configuration
  - key: {{config_key}}
    type: {{config_type}}
    required: {{required}}
    default: {{default_value}}
    description: {{config_description}}

# Metadata (optional)
metadata:
  maintainers:
    - {{maintainer_name}}
  repository: {{repository_url}}
  documentation: {{documentation_url}}

# Conventions
# 1. status is one of implemented, in_progress, planned
# 2. directory paths always start with /
# 3. descriptions are short and concrete
# 4. versions follow semantic versioning
# 5. platform specific implementations are stated explicitly
# 6. required and optional dependencies are listed separately
# 7. API endpoints follow RESTful conventions
# 8. database schemas follow normalization rules
"""
