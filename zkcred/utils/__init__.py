from zkcred.utils.groups import *
