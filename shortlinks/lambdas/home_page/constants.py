# Event codes
HOME_PAGE_SERVED = 'HOME_PAGE_SERVED'
