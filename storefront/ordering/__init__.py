"""Cart pricing, order composition, order lifecycle and store hours"""
