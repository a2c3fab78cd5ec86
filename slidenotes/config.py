import os

# Input Configuration
SUPPORTED_EXTENSIONS = ['.pptx', '.key']  # PowerPoint and Keynote
IMAGE_EXTENSIONS = ['.png', '.jpg', '.jpeg', '.gif']  # Files picked up from the images directory

# Output Configuration
IMAGES_DIRNAME = os.getenv('SLIDENOTES_IMAGES_DIRNAME', 'images')  # Created next to the Markdown file

# Show a short message instead of nothing when a slide's notes cannot be read
INCLUDE_PLACEHOLDERS = os.getenv('SLIDENOTES_PLACEHOLDERS', 'True').lower() in ('true', '1', 'yes', 'on')

# Slide Image Configuration
# 'auto' picks Keynote on macOS, LibreOffice when installed, embedded media otherwise
SLIDE_RENDERER = os.getenv('SLIDENOTES_RENDERER', 'auto').lower()
RENDERER_CHOICES = ['auto', 'keynote', 'libreoffice', 'media']

LIBREOFFICE_BINARY = os.getenv('SLIDENOTES_LIBREOFFICE', 'soffice')
RENDER_DPI: int = int(os.getenv('SLIDENOTES_RENDER_DPI', '150'))
RENDER_TIMEOUT_SECONDS: int = int(os.getenv('SLIDENOTES_RENDER_TIMEOUT', '600'))

# Logging Configuration
LOG_LEVEL = os.getenv('SLIDENOTES_LOG_LEVEL', 'INFO').upper()
