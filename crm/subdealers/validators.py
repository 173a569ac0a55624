import re

from crm.common.errors import InvalidFormat

PHONE_RE = re.compile(r"^[6-9][0-9]{9}$", re.ASCII)
GST_RE = re.compile(r"^[A-Z0-9]{15}$", re.ASCII)

# First two characters of a GSTIN
GST_STATE_CODES = {
    "01": "Jammu and Kashmir",
    "02": "Himachal Pradesh",
    "03": "Punjab",
    "04": "Chandigarh",
    "05": "Uttarakhand",
    "06": "Haryana",
    "07": "Delhi",
    "08": "Rajasthan",
    "09": "Uttar Pradesh",
    "10": "Bihar",
    "11": "Sikkim",
    "12": "Arunachal Pradesh",
    "13": "Nagaland",
    "14": "Manipur",
    "15": "Mizoram",
    "16": "Tripura",
    "17": "Meghalaya",
    "18": "Assam",
    "19": "West Bengal",
    "20": "Jharkhand",
    "21": "Odisha",
    "22": "Chhattisgarh",
    "23": "Madhya Pradesh",
    "24": "Gujarat",
    "26": "Dadra and Nagar Haveli and Daman and Diu",
    "27": "Maharashtra",
    "29": "Karnataka",
    "30": "Goa",
    "31": "Lakshadweep",
    "32": "Kerala",
    "33": "Tamil Nadu",
    "34": "Puducherry",
    "35": "Andaman and Nicobar Islands",
    "36": "Telangana",
    "37": "Andhra Pradesh",
    "38": "Ladakh",
    "97": "Other Territory",
    "99": "Centre Jurisdiction",
}


def validate_phone(value) -> str:
    """
    10-digit mobile number; the leading digit must be 6-9.
    Returns the stripped number.
    """
    phone = str(value or "").strip()
    if not PHONE_RE.match(phone):
        raise InvalidFormat(
            "Phone number must be 10 digits starting with 6, 7, 8 or 9",
            details={"field": "phone"},
        )
    return phone


def validate_gst(value) -> str:
    """
    15 ASCII alphanumeric characters. Returns the upper-cased GST number.
    """
    gst = str(value or "").strip()
    # upper() can change the length of non-ASCII text ("ß" -> "SS")
    if not gst.isascii() or not GST_RE.match(gst.upper()):
        raise InvalidFormat(
            "GST number must be 15 alphanumeric characters",
            details={"field": "gstNumber"},
        )
    return gst.upper()


def pan_from_gst(gst: str) -> str:
    return gst[2:12]


def state_from_gst(gst: str) -> str:
    return GST_STATE_CODES.get(gst[:2], "")
