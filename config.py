"""
Econ Data Explorer — Configuration
All configuration: API endpoints, variable catalogs, states, limits, chart colors, file paths.
"""
import os

# --- API Configuration ---
CENSUS_API_BASE = "https://api.census.gov/data"
CENSUS_DATASET = "acs/acs5"
CENSUS_API_KEY = os.environ.get("CENSUS_API_KEY", None)

FRED_API_BASE = "https://api.stlouisfed.org/fred"
FRED_API_KEY = os.environ.get("FRED_API_KEY", None)
# Optional proxy taking an `endpoint` query parameter (e.g. /api/fred)
FRED_PROXY_URL = os.environ.get("FRED_PROXY_URL", None)

REQUEST_TIMEOUT = 60  # seconds

# --- Selectable Years ---
CENSUS_YEARS = [str(y) for y in range(2023, 2009, -1)]
FRED_YEARS = [str(y) for y in range(2023, 2009, -1)]
HUD_YEARS = [str(y) for y in range(2023, 2014, -1)]
HUD_BASE_YEAR = 2015
HUD_ANNUAL_GROWTH = 0.05

# --- Request Limits ---
MAX_CENSUS_VARIABLES = 50
MAX_FRED_VARIABLES = 20
MIN_COMPARISON_SLOTS = 2
MAX_COMPARISON_SLOTS = 5

# Census annotation values that stand in for "no estimate"
CENSUS_SENTINELS = {
    -999999999, -888888888, -666666666, -555555555, -333333333, -222222222,
}

# --- Variable Catalogs ---
# Format: {category: {human-readable name: source code}}
CENSUS_VARIABLES = {
    "Population": {
        "Total Population": "B01003_001E",
        "Population Age 0-17": "B09001_001E",
        "Population Age 18-24": "B01001_007E",
        "Population Age 25+": "B15003_001E",
        "Working Age Adult Fraction (20-64)": "B23001_001E",
    },
    "Households": {
        "Total Households": "B11001_001E",
        "Total Families": "B11001_002E",
        "Single-Parent Households (Male)": "B11003_010E",
        "Single-Parent Households (Female)": "B11003_016E",
        "Transit Dependent Population": "B08141_001E",
    },
    "Race & Ethnicity": {
        "Hispanic/Latino Population": "B03003_003E",
        "Non-Hispanic/Latino Population": "B03003_002E",
        "White Population (non-Hispanic)": "B03002_003E",
        "African American Population (non-Hispanic)": "B03002_004E",
        "American Indian Population (non-Hispanic)": "B03002_005E",
        "Asian Population (non-Hispanic)": "B03002_006E",
        "Pacific Islander Population (non-Hispanic)": "B03002_007E",
        "Some Other Race Population": "B03002_008E",
        "Two or More Races Population": "B03002_009E",
    },
    "Housing": {
        "Total Housing Units": "B25001_001E",
        "Occupied Housing Units": "B25002_002E",
        "Owner Occupied Housing Units": "B25003_002E",
        "Renter Occupied Housing Units": "B25003_003E",
        "Vacant - For Rent": "B25004_002E",
        "Vacant - Rented Not Yet Occupied": "B25004_003E",
        "Vacant - For Sale": "B25004_004E",
        "Vacant - Sold Not Yet Occupied": "B25004_005E",
        "Vacant - Seasonal Occupant": "B25004_006E",
        "Median Home Value": "B25077_001E",
    },
    "Housing Costs": {
        "Gross Rent As % Income - 30-34%": "B25070_007E",
        "Gross Rent As % Income - 35%+": "B25070_008E",
        "Housing Cost as % Income - Mortgage - 30-34%": "B25091_008E",
        "Housing Cost as % Income - Mortgage - 35%+": "B25091_009E",
    },
    "Income": {
        "Median Household Income": "B19013_001E",
        "Mean Household Income": "B19025_001E",
        "Gini Index of Income": "B19083_001E",
        "Households in Poverty": "B17001_002E",
        "Household w/ Income Below 50% of Poverty Level": "B17026_002E",
        "Household w/ Income Below 125% of Poverty Level": "B17026_003E",
        "Household w/ Income Below 200% of Poverty Level": "B17026_006E",
    },
    "Employment": {
        "Unemployment Count": "B23025_005E",
        "Population in Labor Force": "B23025_002E",
        "Working Age Adults in Labor Force (20-64)": "B23001_006E",
        "Workers with Full-Time Year-Round Positions (16+)": "B23022_001E",
    },
    "Education": {
        "No HS Degree (Age 18-24)": "B15001_004E",
        "HS Degree Population (Age 18-24)": "B15001_005E",
        "Bachelor Degree and Higher (Age 18-24)": "B15001_007E",
        "Less than 9th Grade (Age 25+)": "B15003_002E",
        "Bachelor Degree and Higher (25+)": "B15003_022E",
        "Total High School Enrollment": "B14001_003E",
        "Total College Enrollment": "B14001_008E",
    },
}

FRED_VARIABLES = {
    "Economic Indicators": {
        "Real GDP": "GDPC1",
        "Nominal GDP": "GDP",
        "Personal Consumption Expenditures": "PCE",
        "Industrial Production Index": "INDPRO",
        "Real Personal Income": "RPI",
        "Personal Saving Rate": "PSAVERT",
    },
    "Labor Market": {
        "Unemployment Rate": "UNRATE",
        "Civilian Labor Force Participation Rate": "CIVPART",
        "Total Nonfarm Payrolls": "PAYEMS",
        "Employment-Population Ratio": "EMRATIO",
        "Average Hourly Earnings": "CES0500000003",
        "Job Openings": "JTSJOL",
    },
    "Inflation & Prices": {
        "Consumer Price Index (CPI)": "CPIAUCSL",
        "Core CPI (excluding Food and Energy)": "CPILFESL",
        "Producer Price Index (PPI)": "PPIACO",
        "Personal Consumption Expenditures Price Index": "PCEPI",
    },
    "Housing": {
        "Housing Starts": "HOUST",
        "Building Permits": "PERMIT",
        "New Home Sales": "HSN1F",
        "S&P/Case-Shiller Home Price Index": "CSUSHPINSA",
        "Mortgage Rates (30-Year Fixed)": "MORTGAGE30US",
    },
    "Interest Rates": {
        "Federal Funds Rate": "FEDFUNDS",
        "3-Month Treasury Bill Rate": "TB3MS",
        "10-Year Treasury Constant Maturity Rate": "GS10",
        "BAA Corporate Bond Yield": "BAA",
        "AAA Corporate Bond Yield": "AAA",
    },
    "Money & Banking": {
        "M1 Money Stock": "M1SL",
        "M2 Money Stock": "M2SL",
        "Commercial and Industrial Loans": "BUSLOANS",
    },
}

HUD_VARIABLES = {
    "Fair Market Rents": {
        "0 Bedroom FMR": "0br_fmr",
        "1 Bedroom FMR": "1br_fmr",
        "2 Bedroom FMR": "2br_fmr",
        "3 Bedroom FMR": "3br_fmr",
        "4 Bedroom FMR": "4br_fmr",
    },
    "Income Limits": {
        "Very Low Income (50%) 1 Person": "il_50_1",
        "Very Low Income (50%) 4 Person": "il_50_4",
        "Low Income (80%) 1 Person": "il_80_1",
        "Low Income (80%) 4 Person": "il_80_4",
    },
    "HUD Assisted Housing": {
        "Number of HUD-assisted Units": "hud_units",
        "HUD Unit Occupancy Rate": "occupancy_rate",
        "People per Unit - Average Household Size": "avg_household_size",
        "% of Households Below 30% of Median Income": "pct_below_30_median",
        "% Overhoused (More Bedrooms than People)": "pct_overhoused",
    },
    "Homelessness": {
        "Total Sheltered Homeless": "total_sheltered",
        "Total Unsheltered Homeless": "total_unsheltered",
        "Total Homeless Population": "total_homeless",
    },
}

# Sub-areas reported by the HUD tables when no county is selected
HUD_DEFAULT_AREAS = ["Main County", "South County", "Capital Region"]

# --- States ---
STATES = {
    "AL": {"name": "Alabama", "fips": "01"},
    "AK": {"name": "Alaska", "fips": "02"},
    "AZ": {"name": "Arizona", "fips": "04"},
    "AR": {"name": "Arkansas", "fips": "05"},
    "CA": {"name": "California", "fips": "06"},
    "CO": {"name": "Colorado", "fips": "08"},
    "CT": {"name": "Connecticut", "fips": "09"},
    "DE": {"name": "Delaware", "fips": "10"},
    "DC": {"name": "District of Columbia", "fips": "11"},
    "FL": {"name": "Florida", "fips": "12"},
    "GA": {"name": "Georgia", "fips": "13"},
    "HI": {"name": "Hawaii", "fips": "15"},
    "ID": {"name": "Idaho", "fips": "16"},
    "IL": {"name": "Illinois", "fips": "17"},
    "IN": {"name": "Indiana", "fips": "18"},
    "IA": {"name": "Iowa", "fips": "19"},
    "KS": {"name": "Kansas", "fips": "20"},
    "KY": {"name": "Kentucky", "fips": "21"},
    "LA": {"name": "Louisiana", "fips": "22"},
    "ME": {"name": "Maine", "fips": "23"},
    "MD": {"name": "Maryland", "fips": "24"},
    "MA": {"name": "Massachusetts", "fips": "25"},
    "MI": {"name": "Michigan", "fips": "26"},
    "MN": {"name": "Minnesota", "fips": "27"},
    "MS": {"name": "Mississippi", "fips": "28"},
    "MO": {"name": "Missouri", "fips": "29"},
    "MT": {"name": "Montana", "fips": "30"},
    "NE": {"name": "Nebraska", "fips": "31"},
    "NV": {"name": "Nevada", "fips": "32"},
    "NH": {"name": "New Hampshire", "fips": "33"},
    "NJ": {"name": "New Jersey", "fips": "34"},
    "NM": {"name": "New Mexico", "fips": "35"},
    "NY": {"name": "New York", "fips": "36"},
    "NC": {"name": "North Carolina", "fips": "37"},
    "ND": {"name": "North Dakota", "fips": "38"},
    "OH": {"name": "Ohio", "fips": "39"},
    "OK": {"name": "Oklahoma", "fips": "40"},
    "OR": {"name": "Oregon", "fips": "41"},
    "PA": {"name": "Pennsylvania", "fips": "42"},
    "RI": {"name": "Rhode Island", "fips": "44"},
    "SC": {"name": "South Carolina", "fips": "45"},
    "SD": {"name": "South Dakota", "fips": "46"},
    "TN": {"name": "Tennessee", "fips": "47"},
    "TX": {"name": "Texas", "fips": "48"},
    "UT": {"name": "Utah", "fips": "49"},
    "VT": {"name": "Vermont", "fips": "50"},
    "VA": {"name": "Virginia", "fips": "51"},
    "WA": {"name": "Washington", "fips": "53"},
    "WV": {"name": "West Virginia", "fips": "54"},
    "WI": {"name": "Wisconsin", "fips": "55"},
    "WY": {"name": "Wyoming", "fips": "56"},
    "PR": {"name": "Puerto Rico", "fips": "72"},
}

# Used when the Census county listing cannot be fetched
FALLBACK_COUNTIES = {
    "CA": [
        {"name": "Los Angeles County", "fips": "037"},
        {"name": "San Diego County", "fips": "073"},
        {"name": "Orange County", "fips": "059"},
        {"name": "Alameda County", "fips": "001"},
        {"name": "Santa Clara County", "fips": "085"},
    ],
    "TX": [
        {"name": "Harris County", "fips": "201"},
        {"name": "Dallas County", "fips": "113"},
        {"name": "Travis County", "fips": "453"},
        {"name": "Bexar County", "fips": "029"},
        {"name": "Tarrant County", "fips": "439"},
    ],
    "NY": [
        {"name": "New York County", "fips": "061"},
        {"name": "Kings County", "fips": "047"},
        {"name": "Queens County", "fips": "081"},
        {"name": "Bronx County", "fips": "005"},
        {"name": "Richmond County", "fips": "085"},
    ],
    "FL": [
        {"name": "Miami-Dade County", "fips": "086"},
        {"name": "Broward County", "fips": "011"},
        {"name": "Palm Beach County", "fips": "099"},
        {"name": "Hillsborough County", "fips": "057"},
        {"name": "Orange County", "fips": "095"},
    ],
}

# Known-good selections for a first fetch
RELIABLE_PRESETS = {
    "census": [
        {"state": "CA", "county": "037", "year": "2019", "variable": "B01003_001E"},
        {"state": "NY", "county": "061", "year": "2018", "variable": "B19013_001E"},
    ],
    "fred": [
        {"variable": "GDPC1", "year": "2022"},
        {"variable": "UNRATE", "year": "2023"},
    ],
}

# --- Session Defaults ---
DEFAULT_SOURCE = "census"
DEFAULT_STATE = "CA"
DEFAULT_COUNTY = "037"
DEFAULT_YEARS = ["2017", "2019"]
DEFAULT_VARIABLES = ["B01003_001E", "B19013_001E", "B25077_001E"]

# --- Chart Colors ---
CHART_COLORS = ["#2563EB", "#16A34A", "#EA580C", "#9333EA", "#DC2626"]

# --- Report Colors ---
REPORT_COLOR_SCHEMES = {
    "blue": {"primary": "#1a56db", "secondary": "#2563eb", "text": "#333333"},
    "green": {"primary": "#059669", "secondary": "#10b981", "text": "#333333"},
    "gray": {"primary": "#4b5563", "secondary": "#6b7280", "text": "#333333"},
}

# --- File Paths ---
OUTPUT_DIR = "output"
TABLE_EXPORT = f"{OUTPUT_DIR}/series_table.csv"
CHART_EXPORT = f"{OUTPUT_DIR}/chart_rows.csv"
REPORT_PDF = f"{OUTPUT_DIR}/economic_data_report.pdf"
