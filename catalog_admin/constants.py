# catalog_admin/constants.py
# Conversation states

# Categories
(
    CATEGORY_LIST,
    CATEGORY_FORM,
    WAITING_CATEGORY_NAME,
    WAITING_CATEGORY_DESCRIPTION,
    CONFIRM_DELETE_CATEGORY,
) = range(5)

# Products
(
    PRODUCT_LIST,
    CONFIRM_DELETE_PRODUCT,
    WAITING_PRODUCT_IMAGE,
    WAITING_PRODUCT_TITLE,
    WAITING_PRODUCT_PRICE,
    WAITING_PRODUCT_CATEGORY,
) = range(5, 11)

# user_data keys
CATEGORIES_PAGE = 'categories_page'
PRODUCTS_PAGE = 'products_page'
