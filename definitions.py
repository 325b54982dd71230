import os

_PATH_PROJECT_ROOT = os.path.dirname(__file__)
PATH_RESOURCES = os.path.join(_PATH_PROJECT_ROOT, "resources")
PATH_REFERENCE_DATA = os.path.join(PATH_RESOURCES, "reference")

DEFAULT_INDEX_URL = "https://www.kangarooisland.sa.gov.au/page.aspx?u=1646"
