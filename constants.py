# Flyer Page Geometry (points, 72 per inch). Coordinates below use a top-left
# origin; the canvas helpers flip them onto ReportLab's bottom-left origin.
PAGE_WIDTH = 612   # 8.5in
PAGE_HEIGHT = 792  # 11in
PAGE_MARGIN = 36   # 0.5in on all sides
CONTENT_WIDTH = PAGE_WIDTH - 2 * PAGE_MARGIN

# Header
TITLE_BOX_HEIGHT = 40
TYPE_LABEL_OFFSET = 45
TYPE_LABEL_BOX_HEIGHT = 20
HEADER_HEIGHT = TYPE_LABEL_OFFSET + TYPE_LABEL_BOX_HEIGHT

# Photo block starts at a fixed page Y, not below the measured header
IMAGE_TOP = 120
IMAGE_MAX_HEIGHT = 300

BLOCK_GAP = 30

# Details block
COLUMN_GUTTER = 20
COLUMN_WIDTH = (CONTENT_WIDTH - COLUMN_GUTTER) / 2
PRICE_ROW_HEIGHT = 60
VALUE_OFFSET = 20
LABEL_LINE_HEIGHT = 20
ADDRESS_BOX_HEIGHT = 40
DESCRIPTION_GAP = 10
DESCRIPTION_LINE_SPACING = 4
DESCRIPTION_MAX_HEIGHT = 200

# Contact block
CONTACT_HEADING_HEIGHT = 25
CONTACT_LINE_HEIGHT = 20

# Footer
FOOTER_LINE_GAP = 15

# Type Scale
TITLE_FONT_SIZE = 28
TYPE_LABEL_FONT_SIZE = 14
HEADING_FONT_SIZE = 16
BODY_FONT_SIZE = 14
VALUE_FONT_SIZE = 18
FOOTER_FONT_SIZE = 10

# Line height as a multiple of font size (shared by measuring and drawing)
LEADING_RATIO = 1.2

# Palette
COLOR_DARK_GRAY = "#333333"
COLOR_MEDIUM_GRAY = "#666666"
COLOR_PRIMARY_BLUE = "#0066CC"

# Labels
PRICE_LABEL = "PRICE"
SIZE_LABEL = "SIZE"
ADDRESS_LABEL = "ADDRESS"
DESCRIPTION_LABEL = "DESCRIPTION"
CONTACT_HEADING = "CONTACT INFORMATION"
DEFAULT_BRANDING = "CRE Flyer Maker"

# Layout Version - Bump this when flyer layout changes significantly
LAYOUT_VERSION = 1
