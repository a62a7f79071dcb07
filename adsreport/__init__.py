"""
adsreport - Facebook Ads insight reporting service.

Pulls campaign, ad set and insight data from the Facebook Marketing Graph
API, flattens it into fixed-schema report rows and exports them to CSV,
Excel, Google Sheets and Looker Studio.
"""

from dotenv import load_dotenv

# Load .env file if it exists (important for local development)
load_dotenv()

__version__ = "1.0.0"
